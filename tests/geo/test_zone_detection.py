import pytest

from drift_pricing.geo.geometry import point_in_polygon
from drift_pricing.geo.zone_detection import ZoneDetector
from drift_pricing.geo.zones import ZoneRegistry
from tests import landmarks
from tests.factories import square_zone


@pytest.mark.unit
class TestBundledZoneDetection:
    @pytest.mark.parametrize("point,expected", list(landmarks.ZONE_BY_LANDMARK.items()))
    def test_landmarks_resolve_to_expected_zone(self, detector, point, expected):
        assert detector.detect_zone_id(*point) == expected

    def test_airport_wins_over_overlapping_main_zones(self, detector, registry):
        """The airport polygon overlaps George Town and Prospect."""
        lat, lon = landmarks.AIRPORT_GEORGE_TOWN_OVERLAP
        assert detector.detect_zone_id(lat, lon) == "zone_airport"
        assert point_in_polygon(lon, lat, registry.require_zone("zone_3").boundary)

    def test_sub_zone_wins_over_parent(self, detector, registry):
        zone = detector.detect_zone(*landmarks.HARBOUR)

        assert zone.zone_id == "zone_3a"
        assert zone.parent_zone_id == "zone_3"

    def test_island_interior_falls_back_to_island_zone(self, detector):
        zone = detector.detect_zone(*landmarks.NORTH_SOUND)
        assert zone.display_name == "Grand Cayman"

    @pytest.mark.parametrize("point", [landmarks.MID_OCEAN, landmarks.NORTH_OF_ISLAND])
    def test_outside_service_area_returns_none(self, detector, point):
        assert detector.detect_zone(*point) is None
        assert detector.detect_zone_id(*point) is None

    def test_service_area_is_fully_covered(self, detector, registry):
        """Every interior point of the service bounds resolves to some zone."""
        min_lon, min_lat, max_lon, max_lat = registry.service_bounds
        steps = 25
        for i in range(1, steps):
            for j in range(1, steps):
                lat = min_lat + (max_lat - min_lat) * i / steps
                lon = min_lon + (max_lon - min_lon) * j / steps
                assert detector.detect_zone(lat, lon) is not None, (lat, lon)

    def test_detection_is_deterministic(self, detector):
        results = {detector.detect_zone_id(*landmarks.AIRPORT) for _ in range(20)}
        assert results == {"zone_airport"}

    def test_batch_matches_single_lookups(self, detector):
        coords = [landmarks.WEST_BAY, landmarks.MID_OCEAN, landmarks.SOUTH_SOUND]
        zones = detector.detect_zone_batch(coords)

        assert [z.zone_id if z else None for z in zones] == ["zone_1", None, "zone_3b"]


@pytest.mark.unit
class TestDetectionPriority:
    """Priority rules on a synthetic layout, independent of the bundled zones."""

    @pytest.fixture
    def overlapping_registry(self):
        return ZoneRegistry(
            [
                square_zone("world", 0, 0, 10),
                square_zone("town_a", 1, 1, 4),
                square_zone("town_b", 3, 3, 4),
                square_zone("quarter", 2, 2, 2, parent="town_a"),
                square_zone("port", 3.5, 3.5, 1),
            ],
            airport_zone_id="port",
            fallback_zone_id="world",
        )

    @pytest.fixture
    def overlapping_detector(self, overlapping_registry):
        return ZoneDetector(overlapping_registry)

    def test_airport_beats_sub_zone_and_main_zones(self, overlapping_detector):
        # (lat, lon) = (3.75, 3.75) lies in port, quarter, town_a and town_b
        assert overlapping_detector.detect_zone_id(3.75, 3.75) == "port"

    def test_sub_zone_beats_main_zone(self, overlapping_detector):
        assert overlapping_detector.detect_zone_id(2.5, 2.5) == "quarter"

    def test_first_main_zone_in_registry_order_wins(self, overlapping_detector):
        # Only town_a and town_b contain (4.8, 4.8)
        assert overlapping_detector.detect_zone_id(4.8, 4.8) == "town_a"

    def test_fallback_listed_first_is_still_checked_last(self, overlapping_detector):
        assert overlapping_detector.detect_zone_id(1.5, 1.5) == "town_a"
        assert overlapping_detector.detect_zone_id(9.0, 9.0) == "world"

    def test_outside_every_polygon(self, overlapping_detector):
        assert overlapping_detector.detect_zone_id(-1.0, 5.0) is None


@pytest.mark.unit
class TestDetectionTrace:
    def test_trace_receives_resolved_zone(self, registry):
        events = []
        detector = ZoneDetector(registry, trace=lambda event, fields: events.append((event, fields)))

        detector.detect_zone(*landmarks.HARBOUR)
        detector.detect_zone(*landmarks.MID_OCEAN)

        assert events[0] == (
            "zone.resolved",
            {
                "lat": landmarks.HARBOUR[0],
                "lon": landmarks.HARBOUR[1],
                "zone_id": "zone_3a",
                "tier": "sub_zone",
            },
        )
        assert events[1][1]["zone_id"] is None
        assert events[1][1]["tier"] is None

    def test_fallback_tier_is_reported(self, registry):
        events = []
        detector = ZoneDetector(registry, trace=lambda event, fields: events.append(fields))

        detector.detect_zone(*landmarks.NORTH_SOUND)

        assert events[0]["tier"] == "fallback"

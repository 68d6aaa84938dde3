from datetime import UTC, datetime, timedelta, timezone

import pytest

from drift_pricing.pricing.policy import PricingPolicy, TimeWindow
from drift_pricing.pricing.time_of_day import STANDARD, TimeMultiplier, TimeOfDayPricing


@pytest.fixture
def pricing():
    policy = PricingPolicy()
    return TimeOfDayPricing(policy.time_windows, policy.service_timezone)


def at(hour, minute=0, tzinfo=None):
    return datetime(2025, 6, 15, hour, minute, tzinfo=tzinfo)


@pytest.mark.unit
class TestTimeOfDayPricing:
    @pytest.mark.parametrize(
        "hour,expected",
        [
            (0, TimeMultiplier(1.25, "Late Night")),
            (2, TimeMultiplier(1.25, "Late Night")),
            (5, TimeMultiplier(1.25, "Late Night")),
            (6, TimeMultiplier(1.15, "Early Morning")),
            (7, STANDARD),
            (13, STANDARD),
            (21, STANDARD),
            (22, TimeMultiplier(1.25, "Late Night")),
            (23, TimeMultiplier(1.25, "Late Night")),
        ],
    )
    def test_hour_boundaries(self, pricing, hour, expected):
        assert pricing.get_multiplier(at(hour)) == expected

    def test_minutes_do_not_matter(self, pricing):
        assert pricing.get_multiplier(at(21, 59)) == STANDARD
        assert pricing.get_multiplier(at(6, 59)).name == "Early Morning"

    def test_none_is_standard(self, pricing):
        assert pricing.get_multiplier(None) == STANDARD

    def test_aware_datetimes_converted_to_service_timezone(self, pricing):
        # 18:00 UTC is 13:00 in Grand Cayman, which has no daylight saving
        assert pricing.local_hour(at(18, tzinfo=UTC)) == 13
        assert pricing.get_multiplier(at(3, tzinfo=UTC)).name == "Late Night"

    def test_other_offsets(self, pricing):
        london_summer = timezone(timedelta(hours=1))
        assert pricing.local_hour(at(12, tzinfo=london_summer)) == 6

    def test_naive_datetimes_taken_as_local(self, pricing):
        assert pricing.local_hour(at(13)) == 13

    def test_first_matching_window_wins(self):
        windows = (
            TimeWindow(name="Rush", start_hour=7, end_hour=9, multiplier=1.3),
            TimeWindow(name="Morning", start_hour=6, end_hour=12, multiplier=1.1),
        )
        pricing = TimeOfDayPricing(windows, "UTC")

        assert pricing.get_multiplier(at(8)).name == "Rush"
        assert pricing.get_multiplier(at(10)).name == "Morning"
        assert pricing.get_multiplier(at(14)) == STANDARD

    def test_no_windows(self):
        pricing = TimeOfDayPricing((), "UTC")
        assert pricing.get_multiplier(at(23)) == STANDARD

"""Text rendering of quotes for the trip confirmation screen and receipts."""

from .models import PricingResult, TripCategory
from .money import round_cents
from .policy import PricingPolicy

DEFAULT_CURRENCY_SYMBOL = "CI$"

_DEFAULT_POLICY = PricingPolicy()


def format_currency(amount: float, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    return f"{symbol}{amount:.2f}"


def usd_equivalent(amount: float, policy: PricingPolicy | None = None) -> float:
    """Convert a local-currency amount to US dollars at the policy rate, rounded to cents."""
    rate = (policy or _DEFAULT_POLICY).usd_exchange_rate
    return round_cents(amount * rate)


def format_usd_equivalent(amount: float, policy: PricingPolicy | None = None) -> str:
    return f"≈ ${usd_equivalent(amount, policy):.2f} USD"


def format_pricing_display(result: PricingResult, policy: PricingPolicy | None = None) -> str:
    """Render a quote as a multi-line summary.

    Args:
        result: Quote to render
        policy: Policy supplying the currency symbol; defaults apply if omitted

    Returns:
        Newline-separated summary text
    """
    symbol = policy.currency_symbol if policy else DEFAULT_CURRENCY_SYMBOL
    breakdown = result.breakdown
    lines = [result.display_text, ""]

    if result.category == TripCategory.WITHIN_ZONE:
        lines.append("Within-zone flat rate")
    elif result.category == TripCategory.SUB_ZONE:
        lines.append("Sub-zone rate")
    elif result.category == TripCategory.AIRPORT:
        lines.append("Airport contribution")
    elif result.category == TripCategory.LONG_DISTANCE:
        lines.append("Long-distance fixed contribution")
    else:
        lines.append("Contribution breakdown:")

    for label, amount in breakdown.line_items():
        lines.append(f"   • {label}: {format_currency(amount, symbol)}")

    if breakdown.time_multiplier > 1:
        surcharge = (breakdown.time_multiplier - 1) * 100
        lines.append(f"   • {breakdown.time_multiplier_name}: +{surcharge:.0f}%")

    lines.append("")
    lines.append(
        f"Suggested contribution: {format_currency(result.suggested_contribution, symbol)}"
    )
    lines.append(
        f"   Range: {format_currency(result.min_contribution, symbol)}"
        f" - {format_currency(result.max_contribution, symbol)}"
    )

    return "\n".join(lines)

from __future__ import annotations

from core.pricing.billing import apply_minimum, block_charge, build_quote
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.imports import Frequency
from schemas.service_forms import SaniScrubForm
from schemas.service_rates import SaniScrubRates

MONTHLY_TIER: frozenset[Frequency] = frozenset(
    {
        Frequency.ONE_TIME,
        Frequency.WEEKLY,
        Frequency.BIWEEKLY,
        Frequency.TWICE_PER_MONTH,
        Frequency.MONTHLY,
    }
)
QUARTERLY_TIER: frozenset[Frequency] = frozenset(
    {Frequency.QUARTERLY, Frequency.BIANNUAL, Frequency.ANNUAL}
)


def fixture_tier(frequency: Frequency, rates: SaniScrubRates) -> tuple[str, float, float]:
    if frequency == Frequency.BIMONTHLY:
        return "bimonthly", rates.bimonthly_rate_per_fixture, rates.bimonthly_minimum
    if frequency in QUARTERLY_TIER:
        return "quarterly", rates.quarterly_rate_per_fixture, rates.quarterly_minimum
    return "monthly", rates.monthly_rate_per_fixture, rates.monthly_minimum


def calculate_saniscrub_quote(form: SaniScrubForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates
    tier, rate, minimum = fixture_tier(form.frequency, rates)

    raw_fixtures = form.fixture_count * rate
    fixture_charge = apply_minimum(raw_fixtures, minimum, form.fixture_count)
    non_bathroom_charge = block_charge(
        form.non_bathroom_sqft,
        rates.non_bathroom_unit_sqft,
        rates.non_bathroom_first_unit_rate,
        rates.non_bathroom_additional_unit_rate,
    )
    base_amount = fixture_charge + non_bathroom_charge

    install_multiplier = rates.install_multiplier_dirty if form.is_dirty_install else rates.install_multiplier_clean
    install_fee = base_amount * install_multiplier if form.include_install else 0.0

    discount = 0.0
    if form.has_sani_clean and form.frequency == Frequency.TWICE_PER_MONTH:
        discount = rates.twice_per_month_discount

    line_items = [
        LineItem(
            "Fixtures",
            fixture_charge,
            f"{form.fixture_count} x ${rate:g} ({tier} tier)"
            + (f", minimum ${minimum:g} applied" if fixture_charge > raw_fixtures else ""),
        ),
        LineItem("Non-bathroom area", non_bathroom_charge, f"{form.non_bathroom_sqft:g} sq ft"),
    ]
    return build_quote(
        form,
        config,
        base_amount=base_amount,
        install_fee=install_fee,
        include_install=form.include_install and base_amount > 0,
        combined_discount=discount,
        line_items=line_items,
    )

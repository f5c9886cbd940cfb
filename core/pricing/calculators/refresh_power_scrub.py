from __future__ import annotations

import math

from core.pricing.billing import build_quote
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.imports import KitchenSize, PatioMode, RefreshPricingMethod
from schemas.service_forms import REFRESH_AREAS, RefreshAreaInput, RefreshPowerScrubForm
from schemas.service_rates import RefreshPowerScrubRates

AREA_LABELS: dict[str, str] = {
    "dumpster": "Dumpster",
    "patio": "Patio",
    "walkway": "Walkway",
    "front_of_house": "Front of house",
    "back_of_house": "Back of house",
    "other": "Other",
}


def round_cents(amount: float) -> float:
    return math.floor(amount * 100 + 0.5) / 100


def _square_footage_charge(area: RefreshAreaInput, rates: RefreshPowerScrubRates) -> float:
    subtotal = (
        rates.sqft_fixed_fee
        + area.inside_sqft * rates.inside_sqft_rate
        + area.outside_sqft * rates.outside_sqft_rate
        + rates.trip_charge
    )
    return max(subtotal, rates.minimum_visit)


def _area_specific_charge(name: str, area: RefreshAreaInput, rates: RefreshPowerScrubRates) -> float:
    if name == "patio":
        return rates.patio_upsell_rate if area.patio_mode == PatioMode.UPSELL else rates.patio_standalone_rate
    if name == "walkway":
        # Walkways are priced as outside power washing.
        return _square_footage_charge(area.model_copy(update={"inside_sqft": 0}), rates)
    if name == "front_of_house":
        return rates.front_of_house_rate
    if name == "back_of_house":
        return rates.kitchen_large_rate if area.kitchen_size == KitchenSize.LARGE else rates.kitchen_small_medium_rate
    return rates.minimum_visit


def area_charge(name: str, area: RefreshAreaInput, rates: RefreshPowerScrubRates) -> float:
    """Undiscounted charge for one enabled area, before the rate category."""
    if area.pricing_method == RefreshPricingMethod.HOURLY:
        labor = area.workers * area.hours * rates.hourly_rate
        return max(labor + rates.trip_charge, rates.minimum_visit)
    if area.pricing_method == RefreshPricingMethod.SQUARE_FOOTAGE:
        return _square_footage_charge(area, rates)
    return _area_specific_charge(name, area, rates)


def calculate_refresh_power_scrub_quote(form: RefreshPowerScrubForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates
    multiplier = rates.category_multiplier(form.rate_category)

    line_items: list[LineItem] = []
    per_visit = 0.0
    for name in REFRESH_AREAS:
        area: RefreshAreaInput = getattr(form, name)
        if not area.enabled:
            continue
        amount = round_cents(area_charge(name, area, rates) * multiplier)
        per_visit += amount
        line_items.append(LineItem(AREA_LABELS[name], amount, area.pricing_method.value))

    return build_quote(
        form,
        config,
        base_amount=round_cents(per_visit),
        line_items=line_items,
    )

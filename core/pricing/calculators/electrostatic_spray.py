from __future__ import annotations

from core.pricing.billing import build_quote, units_of
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.imports import Location, SprayPricingMethod
from schemas.service_forms import ElectrostaticSprayForm


def calculate_electrostatic_spray_quote(form: ElectrostaticSprayForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates

    if form.pricing_method == SprayPricingMethod.BY_ROOM:
        service = form.room_count * rates.rate_per_room
        detail = f"{form.room_count} rooms x ${rates.rate_per_room:g}"
    elif form.use_exact_sqft and rates.sqft_unit > 0:
        service = form.area_sqft / rates.sqft_unit * rates.rate_per_thousand_sqft
        detail = f"{form.area_sqft:g} sq ft (exact)"
    else:
        units = units_of(form.area_sqft, rates.sqft_unit)
        service = units * rates.rate_per_thousand_sqft
        detail = f"{units} x {rates.sqft_unit:g} sq ft"

    trip = 0.0
    if service > 0 and not form.is_combined_with_sani_clean:
        trip = (
            rates.trip_charge_inside_beltway
            if form.location == Location.INSIDE_BELTWAY
            else rates.trip_charge_outside_beltway
        )

    return build_quote(
        form,
        config,
        base_amount=service + trip,
        line_items=[LineItem("Spray service", service, detail), LineItem("Trip charge", trip)],
    )

from __future__ import annotations

from core.pricing.billing import build_quote, units_of
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.service_forms import MicrofiberMoppingForm


def calculate_microfiber_mopping_quote(form: MicrofiberMoppingForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates

    bathrooms = form.bathroom_count * rates.bathroom_rate
    huge_bathroom = units_of(form.huge_bathroom_sqft, rates.huge_bathroom_unit_sqft) * rates.huge_bathroom_rate_per_unit

    extra_area = 0.0
    if form.extra_area_sqft > 0:
        extra_area = max(
            rates.extra_area_minimum,
            units_of(form.extra_area_sqft, rates.extra_area_unit_sqft) * rates.extra_area_rate_per_unit,
        )

    standalone = 0.0
    if form.standalone_sqft > 0:
        standalone = max(
            rates.standalone_minimum,
            units_of(form.standalone_sqft, rates.standalone_unit_sqft) * rates.standalone_rate_per_unit,
        )

    line_items = [
        LineItem("Bathrooms", bathrooms, f"{form.bathroom_count} x ${rates.bathroom_rate:g}"),
        LineItem("Huge bathroom", huge_bathroom, f"{form.huge_bathroom_sqft:g} sq ft"),
        LineItem("Extra area", extra_area, f"{form.extra_area_sqft:g} sq ft"),
        LineItem("Standalone area", standalone, f"{form.standalone_sqft:g} sq ft"),
    ]
    return build_quote(
        form,
        config,
        base_amount=bathrooms + huge_bathroom + extra_area + standalone,
        line_items=line_items,
    )

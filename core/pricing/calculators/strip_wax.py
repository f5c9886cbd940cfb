from __future__ import annotations

from core.pricing.billing import apply_minimum, build_quote
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.service_forms import StripWaxForm


def calculate_strip_wax_quote(form: StripWaxForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates
    rate, minimum = rates.variant_pricing(form.variant)
    raw_amount = form.floor_sqft * rate
    floored = apply_minimum(raw_amount, minimum, form.floor_sqft)
    per_visit = floored * rates.category_multiplier(form.rate_category)

    detail = f"{form.floor_sqft:g} sq ft x ${rate:g} ({form.variant.value})"
    if floored > raw_amount:
        detail += f", minimum ${minimum:g} applied"
    return build_quote(
        form,
        config,
        base_amount=per_visit,
        line_items=[LineItem("Floor area", per_visit, detail)],
    )

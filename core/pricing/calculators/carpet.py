from __future__ import annotations

from core.pricing.billing import apply_minimum, block_charge, build_quote
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.service_forms import CarpetForm


def carpet_area_charge(form: CarpetForm) -> float:
    rates = form.rates
    if not form.use_exact_sqft or form.area_sqft <= rates.unit_sqft or rates.unit_sqft <= 0:
        return block_charge(form.area_sqft, rates.unit_sqft, rates.first_unit_rate, rates.additional_unit_rate)
    extra_sqft = form.area_sqft - rates.unit_sqft
    return rates.first_unit_rate + extra_sqft * (rates.additional_unit_rate / rates.unit_sqft)


def calculate_carpet_quote(form: CarpetForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates
    raw_amount = carpet_area_charge(form)
    base_amount = apply_minimum(raw_amount, rates.minimum_per_visit, form.area_sqft)

    install_multiplier = rates.install_multiplier_dirty if form.is_dirty_install else rates.install_multiplier_clean
    install_fee = base_amount * install_multiplier if form.include_install else 0.0

    line_items = [LineItem("Carpet area", raw_amount, f"{form.area_sqft:g} sq ft")]
    if base_amount > raw_amount:
        line_items.append(LineItem("Minimum adjustment", base_amount - raw_amount))

    return build_quote(
        form,
        config,
        base_amount=base_amount,
        install_fee=install_fee,
        include_install=form.include_install and base_amount > 0,
        line_items=line_items,
    )

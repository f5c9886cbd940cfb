from __future__ import annotations

from core.pricing.billing import apply_minimum, build_quote
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.service_forms import GreaseTrapForm


def calculate_grease_trap_quote(form: GreaseTrapForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates
    trap_charge = form.trap_count * rates.per_trap_rate
    gallon_charge = form.gallons * rates.per_gallon_rate
    raw_amount = trap_charge + gallon_charge
    base_amount = apply_minimum(raw_amount, rates.minimum_per_visit, form.trap_count)
    if form.trap_count <= 0:
        base_amount = gallon_charge

    install_fee = form.trap_count * rates.install_rate_per_trap if form.include_install else 0.0

    line_items = [
        LineItem("Traps", trap_charge, f"{form.trap_count} x ${rates.per_trap_rate:g}"),
        LineItem("Gallons pumped", gallon_charge, f"{form.gallons:g} gal x ${rates.per_gallon_rate:g}"),
    ]
    if base_amount > raw_amount:
        line_items.append(LineItem("Minimum adjustment", base_amount - raw_amount))

    return build_quote(
        form,
        config,
        base_amount=base_amount,
        install_fee=install_fee,
        include_install=form.include_install and install_fee > 0,
        line_items=line_items,
    )

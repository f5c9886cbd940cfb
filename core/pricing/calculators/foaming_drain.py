from __future__ import annotations

from core.pricing.billing import build_quote
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.imports import Frequency
from schemas.service_forms import FoamingDrainForm


def calculate_foaming_drain_quote(form: FoamingDrainForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates
    standard = form.standard_drains

    is_volume = standard >= rates.volume_minimum_drains
    can_use_install_program = is_volume and not form.use_big_account_rate and not form.is_all_inclusive
    install_drains = min(form.install_drains, standard) if can_use_install_program else 0
    # All-inclusive packages include standard drains at no charge.
    active_standard = 0 if form.is_all_inclusive else max(standard - install_drains, 0)

    per_drain_total = active_standard * rates.standard_drain_rate
    alt_total = rates.alt_base_charge + rates.alt_extra_per_drain * active_standard if active_standard else 0.0
    use_alt = False
    if active_standard > 0:
        if form.use_small_alt_pricing:
            use_alt = True
        elif not form.use_big_account_rate:
            use_alt = 0 < alt_total < per_drain_total
    standard_charge = alt_total if use_alt else per_drain_total

    volume_rate = rates.volume_bimonthly_rate if form.install_frequency == Frequency.BIMONTHLY else rates.volume_weekly_rate
    install_program_charge = install_drains * volume_rate
    plumbing_charge = form.plumbing_drains * rates.plumbing_addon_rate if form.needs_plumbing else 0.0
    grease_charge = form.grease_traps * rates.grease_weekly_rate
    green_charge = form.green_drains * rates.green_weekly_rate

    raw_amount = standard_charge + install_program_charge + plumbing_charge + grease_charge + green_charge
    per_visit = max(raw_amount, rates.minimum_charge_per_visit) if raw_amount > 0 else 0.0

    filthy_install = 0.0
    if form.is_filthy and active_standard > 0 and not form.use_big_account_rate:
        filthy_count = min(form.filthy_drains, active_standard) if form.filthy_drains > 0 else active_standard
        if use_alt:
            filthy_weekly = rates.alt_base_charge + rates.alt_extra_per_drain * filthy_count
        else:
            filthy_weekly = rates.standard_drain_rate * filthy_count
        filthy_install = filthy_weekly * rates.filthy_multiplier
    grease_install = form.grease_traps * rates.grease_install_rate if form.charge_grease_trap_install else 0.0
    green_install = form.green_drains * rates.green_install_rate
    install_fee = filthy_install + grease_install + green_install

    standard_detail = (
        f"${rates.alt_base_charge:g} + {active_standard} x ${rates.alt_extra_per_drain:g}"
        if use_alt
        else f"{active_standard} x ${rates.standard_drain_rate:g}"
    )
    line_items = [
        LineItem("Standard drains", standard_charge, standard_detail),
        LineItem("Install program drains", install_program_charge, f"{install_drains} x ${volume_rate:g}"),
        LineItem("Plumbing add-on", plumbing_charge, f"{form.plumbing_drains} drains"),
        LineItem("Grease traps", grease_charge, f"{form.grease_traps} traps"),
        LineItem("Green drains", green_charge, f"{form.green_drains} drains"),
    ]
    if per_visit > raw_amount:
        line_items.append(LineItem("Minimum adjustment", per_visit - raw_amount))

    return build_quote(
        form,
        config,
        base_amount=per_visit,
        install_fee=install_fee,
        include_install=install_fee > 0,
        line_items=line_items,
    )

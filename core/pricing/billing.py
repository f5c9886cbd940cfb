from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from core.pricing.frequency import resolve_frequency, visits_in_contract
from core.pricing.types import FrequencyProfile, LineItem, PricingConfig, QuoteBreakdown
from schemas.imports import Frequency
from schemas.service_forms import CustomOverrides, ServiceForm


@dataclass(frozen=True)
class BillingResult:
    profile: FrequencyProfile
    contract_months: int
    per_visit: float
    install_fee: float
    first_period_total: float
    monthly_recurring: float
    contract_total: float
    approx_monthly: float
    total_visits: int | None
    overridden: tuple[str, ...]


def apply_minimum(raw_amount: float, minimum: float, quantity: float) -> float:
    if quantity <= 0:
        return 0.0
    return max(raw_amount, minimum)


def block_charge(sqft: float, unit_sqft: float, first_unit_rate: float, additional_unit_rate: float) -> float:
    """First block at one rate, every further (partial) block at another."""
    if sqft <= 0:
        return 0.0
    if unit_sqft <= 0 or sqft <= unit_sqft:
        return first_unit_rate
    additional_units = math.ceil((sqft - unit_sqft) / unit_sqft)
    return first_unit_rate + additional_units * additional_unit_rate


def units_of(sqft: float, unit_sqft: float) -> int:
    if sqft <= 0 or unit_sqft <= 0:
        return 0
    return math.ceil(sqft / unit_sqft)


def effective_install_fee(computed: float, form: ServiceForm) -> float:
    if form.custom_installation_fee is not None:
        return form.custom_installation_fee
    return computed


def bill_recurring(
    *,
    per_visit: float,
    frequency: Frequency | str,
    config: PricingConfig,
    contract_months: int | None,
    install_fee: float = 0.0,
    include_install: bool = False,
    combined_discount: float = 0.0,
    monthly_extras: float = 0.0,
    overrides: CustomOverrides | None = None,
) -> BillingResult:
    """Split a per-visit charge into first-period, monthly and contract totals.

    Installation replaces the first visit's service charge; it is never billed
    on top of it. Custom overrides replace the matching value and feed the
    values derived from it.
    """
    overrides = overrides or CustomOverrides()
    overridden = overrides.active_fields()
    profile = resolve_frequency(frequency, config)
    months = config.contract_limits.clamp(contract_months)
    multiplier = profile.monthly_multiplier

    if overrides.custom_per_visit_price is not None:
        per_visit = overrides.custom_per_visit_price
    install_fee = install_fee if include_install else 0.0

    approx_monthly = 0.0
    total_visits: int | None = None

    if profile.frequency == Frequency.ONE_TIME:
        monthly_recurring = 0.0
        first_period = install_fee if include_install else per_visit
        total_visits = 1
    elif profile.is_visit_based:
        monthly_recurring = 0.0
        approx_monthly = per_visit * multiplier
        first_period = install_fee if include_install else per_visit
        total_visits = visits_in_contract(profile, months)
    elif profile.frequency == Frequency.MONTHLY:
        monthly_recurring = per_visit + monthly_extras
        first_period = (install_fee if include_install else per_visit) + monthly_extras
    elif profile.frequency == Frequency.TWICE_PER_MONTH:
        monthly_recurring = max(0.0, multiplier * per_visit - combined_discount) + monthly_extras
        if include_install:
            first_period = install_fee + max(0.0, (multiplier - 1) * per_visit - combined_discount) + monthly_extras
        else:
            first_period = monthly_recurring
    else:
        monthly_recurring = per_visit * multiplier + monthly_extras
        if include_install:
            first_period = install_fee + (multiplier - 1) * per_visit + monthly_extras
        else:
            first_period = monthly_recurring

    if overrides.custom_monthly_recurring is not None:
        monthly_recurring = overrides.custom_monthly_recurring
    if overrides.custom_first_month_price is not None:
        first_period = overrides.custom_first_month_price

    if profile.frequency == Frequency.ONE_TIME:
        contract_total = first_period
    elif profile.is_visit_based:
        contract_total = first_period + (total_visits - 1) * per_visit
    else:
        contract_total = first_period + (months - 1) * monthly_recurring

    if overrides.custom_contract_total is not None:
        contract_total = overrides.custom_contract_total

    return BillingResult(
        profile=profile,
        contract_months=months,
        per_visit=per_visit,
        install_fee=install_fee,
        first_period_total=first_period,
        monthly_recurring=monthly_recurring,
        contract_total=contract_total,
        approx_monthly=approx_monthly,
        total_visits=total_visits,
        overridden=overridden,
    )


def build_quote(
    form: ServiceForm,
    config: PricingConfig,
    *,
    base_amount: float,
    per_visit: float | None = None,
    install_fee: float = 0.0,
    include_install: bool = False,
    combined_discount: float = 0.0,
    monthly_extras: float = 0.0,
    frequency: Frequency | str | None = None,
    line_items: Iterable[LineItem] = (),
) -> QuoteBreakdown:
    """Run the shared billing rules for one service form."""
    if include_install:
        install_fee = effective_install_fee(install_fee, form)
    result = bill_recurring(
        per_visit=base_amount if per_visit is None else per_visit,
        frequency=frequency if frequency is not None else form.frequency,
        config=config,
        contract_months=form.contract_months,
        install_fee=install_fee,
        include_install=include_install,
        combined_discount=combined_discount,
        monthly_extras=monthly_extras,
        overrides=form.overrides,
    )

    items = [item for item in line_items if item.amount]
    if result.install_fee:
        items.append(LineItem("Installation", result.install_fee, "replaces first visit service"))
    if combined_discount and result.profile.frequency == Frequency.TWICE_PER_MONTH:
        items.append(LineItem("Combined service discount", -combined_discount, "per month"))

    return QuoteBreakdown(
        service_id=config.service_id,
        frequency=result.profile.frequency,
        is_visit_based=result.profile.is_visit_based,
        contract_months=result.contract_months,
        base_amount=base_amount,
        per_visit=result.per_visit,
        install_fee=result.install_fee,
        first_period_total=result.first_period_total,
        monthly_recurring=result.monthly_recurring,
        contract_total=result.contract_total,
        approx_monthly=result.approx_monthly,
        total_visits=result.total_visits,
        line_items=tuple(items),
        overridden=result.overridden,
    )

from __future__ import annotations

from core.pricing.billing import build_quote
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.imports import Frequency, JanitorialServiceType
from schemas.service_forms import PureJanitorialForm


def service_hours(form: PureJanitorialForm) -> float:
    hours = form.manual_hours + form.vacuuming_hours
    if form.dusting_places and form.rates.dusting_places_per_hour > 0:
        hours += form.dusting_places / form.rates.dusting_places_per_hour
    return hours


def calculate_pure_janitorial_quote(form: PureJanitorialForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates
    is_one_time = form.service_type == JanitorialServiceType.ONE_TIME
    hourly_rate = rates.short_job_hourly_rate if is_one_time else rates.recurring_hourly_rate

    hours = service_hours(form)
    billable_hours = max(hours, rates.minimum_hours) if hours > 0 else 0.0
    per_visit = billable_hours * hourly_rate * rates.category_multiplier(form.rate_category)

    install_fee = per_visit * rates.dirty_initial_multiplier if form.is_dirty_initial else 0.0

    detail = f"{billable_hours:g} h x ${hourly_rate:g}"
    if billable_hours > hours:
        detail += f" ({rates.minimum_hours:g} h minimum)"
    line_items = [LineItem("Labor", per_visit, detail)]

    return build_quote(
        form,
        config,
        base_amount=per_visit,
        install_fee=install_fee,
        include_install=form.is_dirty_initial and install_fee > 0,
        frequency=Frequency.ONE_TIME if is_one_time else None,
        line_items=line_items,
    )

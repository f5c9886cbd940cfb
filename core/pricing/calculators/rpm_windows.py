from __future__ import annotations

from core.pricing.billing import build_quote
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.imports import Frequency
from schemas.service_forms import RpmWindowsForm
from schemas.service_rates import RpmWindowsRates


def frequency_rate_multiplier(frequency: Frequency, rates: RpmWindowsRates) -> float:
    if frequency == Frequency.WEEKLY:
        return rates.weekly_rate_multiplier
    if frequency in {Frequency.BIWEEKLY, Frequency.TWICE_PER_MONTH}:
        return rates.biweekly_rate_multiplier
    if frequency == Frequency.MONTHLY:
        return rates.monthly_rate_multiplier
    return rates.quarterly_rate_multiplier


def calculate_rpm_windows_quote(form: RpmWindowsForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates
    windows = (
        form.small_windows * rates.small_window_rate
        + form.medium_windows * rates.medium_window_rate
        + form.large_windows * rates.large_window_rate
    )
    trip = rates.trip_charge if windows > 0 else 0.0
    multiplier = frequency_rate_multiplier(form.frequency, rates) * rates.category_multiplier(form.rate_category)
    per_visit = (windows + trip) * multiplier

    install_fee = per_visit * rates.install_multiplier if form.is_first_time else 0.0

    count = form.small_windows + form.medium_windows + form.large_windows
    line_items = [
        LineItem("Windows", windows, f"{count} windows"),
        LineItem("Trip charge", trip),
    ]
    if multiplier != 1 and per_visit:
        line_items.append(LineItem("Frequency adjustment", per_visit - windows - trip, f"x{multiplier:g}"))

    return build_quote(
        form,
        config,
        base_amount=per_visit,
        install_fee=install_fee,
        include_install=form.is_first_time and install_fee > 0,
        line_items=line_items,
    )

from __future__ import annotations

from core.pricing.billing import build_quote
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.service_forms import SaniPodForm


def calculate_sanipod_quote(form: SaniPodForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates
    pods = form.pod_count
    line_items: list[LineItem] = []

    pod_service = 0.0
    if pods > 0:
        per_pod_total = pods * rates.rate_per_pod
        base_total = pods * rates.base_rate_per_pod + rates.base_weekly_charge
        if base_total < per_pod_total:
            pod_service = base_total
            detail = f"{pods} x ${rates.base_rate_per_pod:g} + ${rates.base_weekly_charge:g}"
        else:
            pod_service = per_pod_total
            detail = f"{pods} x ${rates.rate_per_pod:g}"
        line_items.append(LineItem("Pods", pod_service, detail))

    bags = form.recurring_bags * rates.extra_bag_rate
    if bags:
        line_items.append(LineItem("Recurring extra bags", bags, f"{form.recurring_bags} bags"))

    per_visit = (pod_service + bags) * rates.category_multiplier(form.rate_category)

    install_fee = 0.0
    if form.is_new_install:
        install_fee = form.install_quantity * rates.install_rate_per_pod + form.extra_bags * rates.extra_bag_rate

    return build_quote(
        form,
        config,
        base_amount=per_visit,
        install_fee=install_fee,
        include_install=form.is_new_install and install_fee > 0,
        line_items=line_items,
    )

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from core.pricing.types import QuoteBreakdown
from schemas.imports import ConfigSource, Frequency, ServiceId


class LineItemOut(BaseModel):
    label: str
    amount: float
    detail: Optional[str] = None


class QuoteOut(BaseModel):
    service_id: ServiceId
    frequency: Frequency
    is_visit_based: bool
    contract_months: int
    base_amount: float
    per_visit: float
    install_fee: float
    first_period_total: float
    monthly_recurring: float
    contract_total: float
    approx_monthly: float = 0
    total_visits: Optional[int] = None
    line_items: List[LineItemOut] = Field(default_factory=list)
    overridden: List[str] = Field(default_factory=list)

    @classmethod
    def from_breakdown(cls, quote: QuoteBreakdown) -> "QuoteOut":
        return cls(
            service_id=quote.service_id,
            frequency=quote.frequency,
            is_visit_based=quote.is_visit_based,
            contract_months=quote.contract_months,
            base_amount=quote.base_amount,
            per_visit=quote.per_visit,
            install_fee=quote.install_fee,
            first_period_total=quote.first_period_total,
            monthly_recurring=quote.monthly_recurring,
            contract_total=quote.contract_total,
            approx_monthly=quote.approx_monthly,
            total_visits=quote.total_visits,
            line_items=[
                LineItemOut(label=item.label, amount=item.amount, detail=item.detail)
                for item in quote.line_items
            ],
            overridden=list(quote.overridden),
        )


class QuoteResult(BaseModel):
    quote: QuoteOut
    config_source: ConfigSource
    config_issues: List[str] = Field(default_factory=list)
    config_error: Optional[str] = None


class QuoteRequest(BaseModel):
    form: dict[str, Any] = Field(default_factory=dict)
    use_remote_config: bool = False


class ProposalServiceRequest(BaseModel):
    service_id: ServiceId
    form: dict[str, Any] = Field(default_factory=dict)


class ProposalRequest(BaseModel):
    services: List[ProposalServiceRequest] = Field(min_length=1)
    use_remote_config: bool = False


class ProposalLine(BaseModel):
    service_id: ServiceId
    display_name: str
    frequency: Frequency
    contract_months: int
    per_visit: float
    first_period_total: float
    monthly_recurring: float
    contract_total: float


class ProposalSummary(BaseModel):
    lines: List[ProposalLine] = Field(default_factory=list)
    service_count: int = 0
    per_visit_total: float = 0
    first_period_total: float = 0
    monthly_recurring_total: float = 0
    contract_total: float = 0


class ServiceCatalogEntry(BaseModel):
    service_id: ServiceId
    display_name: str
    default_frequency: Frequency
    frequencies: List[Frequency]

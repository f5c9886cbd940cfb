from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from schemas.imports import ConfigSource, Frequency, ServiceId
from schemas.service_rates import ServiceRates


@dataclass(frozen=True)
class ContractLimits:
    min_months: int
    max_months: int
    default_months: int

    def clamp(self, months: int | None) -> int:
        if months is None:
            months = self.default_months
        return max(self.min_months, min(self.max_months, int(months)))


@dataclass(frozen=True)
class PricingConfig:
    service_id: ServiceId
    rates: ServiceRates
    frequency_multipliers: Mapping[str, float]
    annual_frequencies: Mapping[str, float]
    contract_limits: ContractLimits
    source: ConfigSource = ConfigSource.DEFAULT
    issues: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "frequency_multipliers", MappingProxyType(dict(self.frequency_multipliers)))
        object.__setattr__(self, "annual_frequencies", MappingProxyType(dict(self.annual_frequencies)))


@dataclass(frozen=True)
class FrequencyProfile:
    key: str
    frequency: Frequency
    monthly_multiplier: float
    visits_per_year: float
    is_visit_based: bool
    cycle_months: int | None = None
    recognized: bool = True


@dataclass(frozen=True)
class LineItem:
    label: str
    amount: float
    detail: str | None = None


@dataclass(frozen=True)
class QuoteBreakdown:
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
    approx_monthly: float = 0.0
    total_visits: int | None = None
    line_items: tuple[LineItem, ...] = field(default_factory=tuple)
    overridden: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_active(self) -> bool:
        return any(
            amount > 0
            for amount in (
                self.per_visit,
                self.install_fee,
                self.first_period_total,
                self.monthly_recurring,
                self.contract_total,
            )
        )

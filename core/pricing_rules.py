from __future__ import annotations

from schemas.imports import Frequency


VISIT_BASED_FREQUENCIES: frozenset[Frequency] = frozenset(
    {
        Frequency.ONE_TIME,
        Frequency.BIMONTHLY,
        Frequency.QUARTERLY,
        Frequency.BIANNUAL,
        Frequency.ANNUAL,
    }
)

# Unknown frequency keys resolve to this entry.
FALLBACK_FREQUENCY: Frequency = Frequency.MONTHLY

DEFAULT_FREQUENCY_MULTIPLIERS: dict[Frequency, float] = {
    Frequency.ONE_TIME: 0.0,
    Frequency.WEEKLY: 4.33,
    Frequency.BIWEEKLY: 2.165,
    Frequency.TWICE_PER_MONTH: 2.0,
    Frequency.MONTHLY: 1.0,
    Frequency.BIMONTHLY: 0.5,
    Frequency.QUARTERLY: 0.333,
    Frequency.BIANNUAL: 0.167,
    Frequency.ANNUAL: 0.083,
}

DEFAULT_ANNUAL_FREQUENCIES: dict[Frequency, float] = {
    Frequency.ONE_TIME: 1,
    Frequency.WEEKLY: 52,
    Frequency.BIWEEKLY: 26,
    Frequency.TWICE_PER_MONTH: 24,
    Frequency.MONTHLY: 12,
    Frequency.BIMONTHLY: 6,
    Frequency.QUARTERLY: 4,
    Frequency.BIANNUAL: 2,
    Frequency.ANNUAL: 1,
}

VISIT_CYCLE_MONTHS: dict[Frequency, int] = {
    Frequency.BIMONTHLY: 2,
    Frequency.QUARTERLY: 3,
    Frequency.BIANNUAL: 6,
    Frequency.ANNUAL: 12,
}

CONTRACT_MIN_MONTHS: int = 2
CONTRACT_MAX_MONTHS: int = 36
CONTRACT_DEFAULT_MONTHS: int = 12

def default_frequency_multipliers(**overrides: float) -> dict[str, float]:
    table = {frequency.value: value for frequency, value in DEFAULT_FREQUENCY_MULTIPLIERS.items()}
    table.update(overrides)
    return table


def default_annual_frequencies(**overrides: float) -> dict[str, float]:
    table = {frequency.value: value for frequency, value in DEFAULT_ANNUAL_FREQUENCIES.items()}
    table.update(overrides)
    return table

from __future__ import annotations

import logging
import math

from core.pricing.types import FrequencyProfile, PricingConfig
from core.pricing_rules import (
    DEFAULT_ANNUAL_FREQUENCIES,
    DEFAULT_FREQUENCY_MULTIPLIERS,
    FALLBACK_FREQUENCY,
    VISIT_BASED_FREQUENCIES,
    VISIT_CYCLE_MONTHS,
)
from schemas.imports import Frequency

logger = logging.getLogger(__name__)


def _normalize_key(frequency: Frequency | str) -> str:
    if isinstance(frequency, Frequency):
        return frequency.value
    return str(frequency).strip()


def _match_frequency(key: str) -> Frequency | None:
    try:
        return Frequency(key)
    except ValueError:
        pass
    # Tolerate "Twice Per Month", "bi-weekly" and similar spellings.
    folded = key.replace(" ", "").replace("-", "").replace("_", "").lower()
    for frequency in Frequency:
        if frequency.value.lower() == folded:
            return frequency
    return None


def resolve_frequency(frequency: Frequency | str, config: PricingConfig | None = None) -> FrequencyProfile:
    """Resolve a frequency key against a config's tables.

    Unrecognized keys resolve to the monthly entry and are reported with
    ``recognized=False`` instead of raising.
    """
    key = _normalize_key(frequency)
    matched = _match_frequency(key)
    recognized = matched is not None
    if matched is None:
        logger.warning("Unknown frequency %r; falling back to %s", key, FALLBACK_FREQUENCY.value)
        matched = FALLBACK_FREQUENCY

    if config is not None:
        multiplier = config.frequency_multipliers.get(matched.value)
        visits = config.annual_frequencies.get(matched.value)
    else:
        multiplier = None
        visits = None
    if multiplier is None:
        multiplier = DEFAULT_FREQUENCY_MULTIPLIERS[matched]
    if visits is None:
        visits = DEFAULT_ANNUAL_FREQUENCIES[matched]

    return FrequencyProfile(
        key=key,
        frequency=matched,
        monthly_multiplier=float(multiplier),
        visits_per_year=float(visits),
        is_visit_based=matched in VISIT_BASED_FREQUENCIES,
        cycle_months=VISIT_CYCLE_MONTHS.get(matched),
        recognized=recognized,
    )


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def visits_in_contract(profile: FrequencyProfile, contract_months: int) -> int:
    if profile.frequency == Frequency.ONE_TIME:
        return 1
    if profile.cycle_months:
        # A contract always includes the first visit.
        return max(1, round_half_up(contract_months / profile.cycle_months))
    return max(1, round_half_up(profile.visits_per_year * contract_months / 12))

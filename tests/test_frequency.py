from __future__ import annotations

import logging

import pytest

from core.pricing import default_pricing_config, resolve_frequency
from core.pricing.frequency import round_half_up, visits_in_contract
from schemas.imports import Frequency, ServiceId


def test_weekly_resolves_to_cadenced_profile():
    profile = resolve_frequency(Frequency.WEEKLY, default_pricing_config(ServiceId.SANI_SCRUB))

    assert profile.monthly_multiplier == pytest.approx(4.33)
    assert profile.visits_per_year == 52
    assert profile.is_visit_based is False
    assert profile.cycle_months is None


@pytest.mark.parametrize(
    "frequency, cycle",
    [
        (Frequency.BIMONTHLY, 2),
        (Frequency.QUARTERLY, 3),
        (Frequency.BIANNUAL, 6),
        (Frequency.ANNUAL, 12),
    ],
)
def test_visit_based_frequencies_carry_cycle_length(frequency: Frequency, cycle: int):
    profile = resolve_frequency(frequency)

    assert profile.is_visit_based is True
    assert profile.cycle_months == cycle


def test_one_time_is_visit_based_without_cycle():
    profile = resolve_frequency("oneTime")

    assert profile.is_visit_based is True
    assert profile.monthly_multiplier == 0


def test_unknown_frequency_falls_back_to_monthly(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING, logger="core.pricing.frequency"):
        profile = resolve_frequency("fortnightly", default_pricing_config(ServiceId.SANI_SCRUB))

    assert profile.recognized is False
    assert profile.key == "fortnightly"
    assert profile.frequency == Frequency.MONTHLY
    assert profile.monthly_multiplier == 1.0
    assert profile.visits_per_year == 12
    assert "fortnightly" in caplog.text


def test_loose_spelling_is_recognized():
    profile = resolve_frequency("Twice Per Month")

    assert profile.recognized is True
    assert profile.frequency == Frequency.TWICE_PER_MONTH


def test_service_specific_table_overrides_default():
    profile = resolve_frequency(Frequency.WEEKLY, default_pricing_config(ServiceId.SANI_CLEAN))

    assert profile.monthly_multiplier == pytest.approx(4.2)
    assert profile.visits_per_year == 50


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(1.5) == 2
    assert round_half_up(0.4) == 0
    assert round_half_up(4.0) == 4


def test_visits_in_contract_never_below_one():
    assert visits_in_contract(resolve_frequency(Frequency.QUARTERLY), 12) == 4
    assert visits_in_contract(resolve_frequency(Frequency.BIMONTHLY), 5) == 3
    assert visits_in_contract(resolve_frequency(Frequency.ANNUAL), 2) == 1
    assert visits_in_contract(resolve_frequency(Frequency.ONE_TIME), 24) == 1

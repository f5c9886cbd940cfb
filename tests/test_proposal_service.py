from __future__ import annotations

import pytest

from core.config_source import StaticPricingConfigSource
from core.pricing import calculate_quote, default_pricing_config
from schemas.imports import ServiceId
from schemas.service_forms import CarpetForm, SaniScrubForm
from services.proposal_service import ProposalAggregator, summarize_quotes
from services.quote_session import CalculatorSession


def test_summarize_quotes_skips_inactive_services():
    scrub = calculate_quote(
        SaniScrubForm(fixture_count=10, contract_months=12),
        default_pricing_config(ServiceId.SANI_SCRUB),
    )
    carpet = calculate_quote(CarpetForm(), default_pricing_config(ServiceId.CARPET_CLEANING))

    summary = summarize_quotes([scrub, carpet])

    assert summary.service_count == 1
    assert summary.lines[0].display_name == "SaniScrub"
    assert summary.contract_total == 3000
    assert summary.monthly_recurring_total == 250


def test_aggregator_follows_tracked_sessions():
    source = StaticPricingConfigSource()
    scrub = CalculatorSession(
        ServiceId.SANI_SCRUB,
        initial={"fixture_count": 10, "contract_months": 12},
        source=source,
    )
    carpet = CalculatorSession(
        ServiceId.CARPET_CLEANING,
        initial={"area_sqft": 400, "contract_months": 12},
        source=source,
    )
    aggregator = ProposalAggregator()
    aggregator.track(scrub)
    aggregator.track(carpet)

    assert aggregator.summary().monthly_recurring_total == 500

    scrub.dispatch({"kind": "setQuantity", "field": "fixture_count", "value": 12})

    summary = aggregator.summary()
    assert summary.service_count == 2
    assert summary.monthly_recurring_total == 550
    assert summary.contract_total == pytest.approx(550 * 12)


def test_untrack_drops_service():
    session = CalculatorSession(ServiceId.SANI_SCRUB, initial={"fixture_count": 10}, source=StaticPricingConfigSource())
    aggregator = ProposalAggregator()
    aggregator.track(session)

    aggregator.untrack(ServiceId.SANI_SCRUB)
    session.dispatch({"kind": "setQuantity", "field": "fixture_count", "value": 20})

    assert aggregator.quotes() == []
    assert aggregator.summary().service_count == 0

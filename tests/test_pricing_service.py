from __future__ import annotations

import asyncio

import pytest

from core.config_source import StaticPricingConfigSource
from core.errors import AppException, MalformedConfigError
from schemas.imports import ConfigSource
from schemas.quote import ProposalRequest
from services import pricing_service


class _MalformedSource:
    backend_name = "test"

    async def fetch_active(self, service_id):
        raise MalformedConfigError(service_id.value, "document has no config object")


def test_catalog_default_frequencies_follow_forms():
    catalog = {entry.service_id.value: entry for entry in pricing_service.list_service_catalog()}

    assert catalog["stripWax"].default_frequency.value == "oneTime"
    assert catalog["saniscrub"].default_frequency.value == "monthly"
    assert catalog["foamingDrain"].default_frequency.value == "weekly"


def test_calculate_service_quote_with_defaults():
    result = asyncio.run(pricing_service.calculate_service_quote("greaseTrap", {"trap_count": 2, "gallons": 100}))

    assert result.config.source == ConfigSource.DEFAULT
    assert result.quote.per_visit == 300


@pytest.mark.asyncio
async def test_malformed_remote_config_falls_back_to_defaults():
    result = await pricing_service.calculate_service_quote(
        "saniscrub",
        {"fixture_count": 10},
        use_remote_config=True,
        source=_MalformedSource(),
    )

    assert result.config.source == ConfigSource.DEFAULT
    assert result.config_error == "saniscrub: document has no config object"
    assert result.quote.per_visit == 250


@pytest.mark.asyncio
async def test_remote_config_is_skipped_unless_requested():
    source = StaticPricingConfigSource({"saniscrub": {"monthlyRatePerFixture": 30}})

    result = await pricing_service.calculate_service_quote("saniscrub", {"fixture_count": 10}, source=source)

    assert result.quote.per_visit == 250


@pytest.mark.asyncio
async def test_unknown_service_raises_not_found():
    with pytest.raises(AppException) as exc_info:
        await pricing_service.calculate_service_quote("laundry", {})

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_summarize_proposal_uses_shared_source():
    source = StaticPricingConfigSource({"saniscrub": {"monthlyRatePerFixture": 30}})
    request = ProposalRequest.model_validate(
        {
            "services": [
                {"service_id": "saniscrub", "form": {"fixture_count": 10, "contract_months": 12}},
                {"service_id": "greaseTrap", "form": {"trap_count": 1, "contract_months": 12}},
            ],
            "use_remote_config": True,
        }
    )

    summary = await pricing_service.summarize_proposal(request, source=source)

    assert summary.service_count == 2
    assert summary.monthly_recurring_total == 300 + 125

from __future__ import annotations

import httpx
import pytest

from core.config_source import HttpPricingConfigSource, PricingConfigSourceManager, StaticPricingConfigSource
from core.config_source.http_provider import ACTIVE_CONFIG_PATH
from core.errors import ConfigUnavailableError, MalformedConfigError
from schemas.imports import ServiceId


def _source(handler) -> HttpPricingConfigSource:
    return HttpPricingConfigSource(base_url="https://pricing.test/", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_active_returns_config_object():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"serviceId": "saniscrub", "config": {"monthlyRatePerFixture": 30}})

    document = await _source(handler).fetch_active(ServiceId.SANI_SCRUB)

    assert document == {"monthlyRatePerFixture": 30}
    assert seen[0].url.path == ACTIVE_CONFIG_PATH
    assert seen[0].url.params["serviceId"] == "saniscrub"


@pytest.mark.asyncio
async def test_fetch_active_unwraps_data_envelope():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": True, "data": {"config": {"tripCharge": 9}}})

    assert await _source(handler).fetch_active(ServiceId.SANI_CLEAN) == {"tripCharge": 9}


@pytest.mark.asyncio
async def test_unexpected_transport_error_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise RuntimeError("socket closed")

    with pytest.raises(ConfigUnavailableError) as excinfo:
        await _source(handler).fetch_active(ServiceId.SANI_SCRUB)

    assert "config fetch failed" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_not_found_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "missing"})

    with pytest.raises(ConfigUnavailableError) as exc_info:
        await _source(handler).fetch_active(ServiceId.SANI_SCRUB)
    assert exc_info.value.reason == "config not found"


@pytest.mark.asyncio
async def test_server_error_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    with pytest.raises(ConfigUnavailableError) as exc_info:
        await _source(handler).fetch_active(ServiceId.SANI_SCRUB)
    assert exc_info.value.reason == "config service returned 503"


@pytest.mark.asyncio
async def test_transport_failure_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ConfigUnavailableError):
        await _source(handler).fetch_active(ServiceId.SANI_SCRUB)


@pytest.mark.asyncio
async def test_invalid_json_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>", headers={"content-type": "text/html"})

    with pytest.raises(ConfigUnavailableError):
        await _source(handler).fetch_active(ServiceId.SANI_SCRUB)


@pytest.mark.asyncio
async def test_empty_body_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    with pytest.raises(ConfigUnavailableError):
        await _source(handler).fetch_active(ServiceId.SANI_SCRUB)


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [[1, 2], {"config": "flat"}, {"serviceId": "saniscrub"}])
async def test_unexpected_shapes_are_malformed(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with pytest.raises(MalformedConfigError):
        await _source(handler).fetch_active(ServiceId.SANI_SCRUB)


@pytest.mark.asyncio
async def test_static_source_returns_copies():
    source = StaticPricingConfigSource({"saniscrub": {"monthlyRatePerFixture": 30}})

    document = await source.fetch_active(ServiceId.SANI_SCRUB)
    document["monthlyRatePerFixture"] = 99

    assert await source.fetch_active(ServiceId.SANI_SCRUB) == {"monthlyRatePerFixture": 30}
    with pytest.raises(ConfigUnavailableError):
        await source.fetch_active(ServiceId.CARPET_CLEANING)


def test_manager_builds_source_from_settings(monkeypatch):
    from core import settings as settings_module

    monkeypatch.setenv("PRICING_CONFIG_BACKEND", "http")
    monkeypatch.setenv("PRICING_CONFIG_BASE_URL", "https://pricing.test")
    settings_module.get_settings.cache_clear()
    try:
        manager = PricingConfigSourceManager.configure_from_settings()
        assert manager.source.backend_name == "http"
        assert PricingConfigSourceManager.get_instance() is manager
    finally:
        PricingConfigSourceManager.reset()
        settings_module.get_settings.cache_clear()

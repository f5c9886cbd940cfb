from __future__ import annotations

import logging
from typing import Any

import httpx

from core.errors import ConfigUnavailableError, MalformedConfigError
from schemas.imports import ServiceId

logger = logging.getLogger(__name__)

ACTIVE_CONFIG_PATH = "/api/service-configs/active"


def extract_config_document(service_id: str, payload: Any) -> dict[str, Any]:
    """Pull the rate document out of an active-config response body."""
    if not isinstance(payload, dict):
        raise MalformedConfigError(service_id, "response body is not an object")

    document = payload
    if isinstance(payload.get("data"), dict):
        document = payload["data"]
    if not document:
        raise ConfigUnavailableError(service_id, "empty response")

    config = document.get("config")
    if not isinstance(config, dict):
        raise MalformedConfigError(service_id, "document has no config object")
    return config


class HttpPricingConfigSource:
    backend_name = "http"

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def fetch_active(self, service_id: ServiceId) -> dict[str, Any]:
        key = ServiceId(service_id).value
        url = f"{self._base_url}{ACTIVE_CONFIG_PATH}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(url, params={"serviceId": key})
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            reason = "config not found" if status_code == 404 else f"config service returned {status_code}"
            raise ConfigUnavailableError(key, reason) from exc
        except httpx.HTTPError as exc:
            raise ConfigUnavailableError(key, f"config service unreachable: {exc}") from exc
        except ValueError as exc:
            raise ConfigUnavailableError(key, "config service returned invalid JSON") from exc
        except Exception as exc:
            logger.exception("Unexpected error fetching pricing config", extra={"service_id": key})
            raise ConfigUnavailableError(key, f"config fetch failed: {exc}") from exc

        logger.debug("Fetched active pricing config", extra={"service_id": key})
        return extract_config_document(key, payload)

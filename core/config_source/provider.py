from __future__ import annotations

from typing import Any, Protocol

from schemas.imports import ServiceId


class PricingConfigSource(Protocol):
    backend_name: str

    async def fetch_active(self, service_id: ServiceId) -> dict[str, Any]:
        """Return the active rate document for ``service_id``.

        Raises ConfigUnavailableError or MalformedConfigError.
        """
        ...

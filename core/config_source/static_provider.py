from __future__ import annotations

import copy
from typing import Any, Mapping

from core.errors import ConfigUnavailableError
from schemas.imports import ServiceId


class StaticPricingConfigSource:
    backend_name = "static"

    def __init__(self, documents: Mapping[ServiceId | str, Mapping[str, Any]] | None = None) -> None:
        self._documents: dict[str, dict[str, Any]] = {
            ServiceId(key).value: dict(value) for key, value in (documents or {}).items()
        }

    def put(self, service_id: ServiceId | str, document: Mapping[str, Any]) -> None:
        self._documents[ServiceId(service_id).value] = dict(document)

    async def fetch_active(self, service_id: ServiceId) -> dict[str, Any]:
        key = ServiceId(service_id).value
        document = self._documents.get(key)
        if document is None:
            raise ConfigUnavailableError(key, "no active config")
        return copy.deepcopy(document)

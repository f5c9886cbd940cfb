from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError

from core.config_source import PricingConfigSource, PricingConfigSourceManager
from core.errors import PricingConfigError, resource_not_found, unsupported_frequency, validation_failed
from core.pricing import (
    SERVICE_DEFINITIONS,
    PricingConfig,
    QuoteBreakdown,
    ServiceDefinition,
    UnknownServiceError,
    build_form,
    default_pricing_config,
    get_service_definition,
    load_pricing_config,
)
from core.validation_errors import format_validation_error_details
from schemas.imports import ServiceId
from schemas.quote import ProposalRequest, ProposalSummary, ServiceCatalogEntry
from services.proposal_service import summarize_quotes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceQuote:
    quote: QuoteBreakdown
    config: PricingConfig
    config_error: str | None = None


def _definition_or_404(service_id: str) -> ServiceDefinition:
    try:
        return get_service_definition(service_id)
    except UnknownServiceError:
        raise resource_not_found("Service", service_id) from None


def list_service_catalog() -> list[ServiceCatalogEntry]:
    return [
        ServiceCatalogEntry(
            service_id=definition.service_id,
            display_name=definition.display_name,
            default_frequency=definition.default_frequency,
            frequencies=list(definition.frequencies),
        )
        for definition in SERVICE_DEFINITIONS.values()
    ]


async def resolve_pricing_config(
    service_id: ServiceId,
    *,
    use_remote_config: bool,
    source: PricingConfigSource | None = None,
) -> tuple[PricingConfig, str | None]:
    if not use_remote_config:
        return default_pricing_config(service_id), None

    source = source or PricingConfigSourceManager.get_instance().source
    try:
        document = await source.fetch_active(service_id)
    except PricingConfigError as exc:
        logger.warning(
            "Pricing config unavailable for %s; using defaults",
            service_id.value,
            extra={"service_id": service_id.value, "error_type": type(exc).__name__},
        )
        return default_pricing_config(service_id), str(exc)
    return load_pricing_config(service_id, document), None


async def calculate_service_quote(
    service_id: str,
    form_payload: Mapping[str, Any] | None = None,
    *,
    use_remote_config: bool = False,
    source: PricingConfigSource | None = None,
) -> ServiceQuote:
    definition = _definition_or_404(service_id)
    config, config_error = await resolve_pricing_config(
        definition.service_id,
        use_remote_config=use_remote_config,
        source=source,
    )

    try:
        form, _ = build_form(definition.form_model, config, form_payload)
    except ValidationError as exc:
        raise validation_failed(
            f"Invalid {definition.display_name} form",
            format_validation_error_details(exc.errors(), location="form"),
        )

    if not definition.allows(form.frequency):
        raise unsupported_frequency(
            definition.service_id.value,
            form.frequency.value,
            [frequency.value for frequency in definition.frequencies],
        )

    quote = definition.calculator(form, config)
    return ServiceQuote(quote=quote, config=config, config_error=config_error)


async def summarize_proposal(
    request: ProposalRequest,
    *,
    source: PricingConfigSource | None = None,
) -> ProposalSummary:
    quotes: list[QuoteBreakdown] = []
    for item in request.services:
        result = await calculate_service_quote(
            item.service_id.value,
            item.form,
            use_remote_config=request.use_remote_config,
            source=source,
        )
        quotes.append(result.quote)
    return summarize_quotes(quotes)

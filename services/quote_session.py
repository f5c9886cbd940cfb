from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from core.config_source import PricingConfigSource, PricingConfigSourceManager
from core.errors import PricingConfigError
from core.pricing import (
    PricingConfig,
    QuoteBreakdown,
    apply_config,
    build_form,
    default_pricing_config,
    get_service_definition,
    load_pricing_config,
    reduce_form,
)
from schemas.form_actions import FormAction, parse_form_action
from schemas.imports import ServiceId
from schemas.service_forms import ServiceForm

logger = logging.getLogger(__name__)

QuoteListener = Callable[[QuoteBreakdown], None]


class CalculatorSession:
    """One service calculator: form state, active config and the latest quote.

    Starts on the compiled default rates. ``load_config`` swaps in the active
    remote config when it arrives; failures leave the session usable.
    """

    def __init__(
        self,
        service_id: ServiceId | str,
        *,
        initial: Mapping[str, Any] | None = None,
        source: PricingConfigSource | None = None,
    ) -> None:
        self._definition = get_service_definition(service_id)
        self._source = source
        self._config = default_pricing_config(self._definition.service_id)
        self._form, self._pinned_rates = build_form(self._definition.form_model, self._config, initial)
        self._definition.require_frequency(self._form.frequency)
        self._listeners: list[QuoteListener] = []
        self._closed = False
        self._in_flight = 0
        self.last_fetch_error: str | None = None
        self._quote = self._definition.calculator(self._form, self._config)

    @property
    def service_id(self) -> ServiceId:
        return self._definition.service_id

    @property
    def form(self) -> ServiceForm:
        return self._form

    @property
    def config(self) -> PricingConfig:
        return self._config

    @property
    def quote(self) -> QuoteBreakdown:
        return self._quote

    @property
    def is_loading_config(self) -> bool:
        return self._in_flight > 0

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: QuoteListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: FormAction | dict[str, Any]) -> QuoteBreakdown:
        if isinstance(action, dict):
            action = parse_form_action(action)
        form = reduce_form(self._form, action, self._config)
        self._definition.require_frequency(form.frequency)
        self._form = form
        return self._recompute()

    def _recompute(self) -> QuoteBreakdown:
        self._quote = self._definition.calculator(self._form, self._config)
        for listener in list(self._listeners):
            listener(self._quote)
        return self._quote

    def _resolve_source(self) -> PricingConfigSource:
        if self._source is None:
            self._source = PricingConfigSourceManager.get_instance().source
        return self._source

    async def load_config(self) -> PricingConfig:
        """Fetch the active config once and apply it if the session is still open."""
        if self._closed:
            return self._config

        service_key = self.service_id.value
        source = self._resolve_source()
        self._in_flight += 1
        try:
            document = await source.fetch_active(self.service_id)
        except PricingConfigError as exc:
            if self._closed:
                logger.info("Discarding config error for closed %s calculator", service_key)
                return self._config
            self.last_fetch_error = str(exc)
            logger.warning(
                "Pricing config unavailable for %s; keeping %s rates",
                service_key,
                self._config.source.value,
                extra={"service_id": service_key, "error_type": type(exc).__name__},
            )
            return self._config
        finally:
            self._in_flight -= 1

        if self._closed:
            logger.info("Discarding config for closed %s calculator", service_key)
            return self._config

        config = load_pricing_config(self.service_id, document)
        self._config = config
        self.last_fetch_error = None
        self._form = apply_config(self._form, config, self._pinned_rates)
        logger.info(
            "Loaded pricing config for %s",
            service_key,
            extra={"service_id": service_key, "config_source": config.source.value},
        )
        self._recompute()
        return config

    async def refresh_config(self) -> PricingConfig:
        logger.info("Refreshing pricing config for %s", self.service_id.value)
        return await self.load_config()

    def close(self) -> None:
        self._closed = True
        self._listeners.clear()

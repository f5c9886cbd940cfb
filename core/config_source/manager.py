from __future__ import annotations

from threading import Lock

from core.config_source.http_provider import HttpPricingConfigSource
from core.config_source.provider import PricingConfigSource
from core.config_source.static_provider import StaticPricingConfigSource
from core.settings import get_settings


class PricingConfigSourceManager:
    _instance: "PricingConfigSourceManager | None" = None
    _lock = Lock()

    def __init__(self, source: PricingConfigSource) -> None:
        self._source = source

    @classmethod
    def configure(cls, source: PricingConfigSource) -> "PricingConfigSourceManager":
        with cls._lock:
            cls._instance = cls(source)
            return cls._instance

    @classmethod
    def configure_from_settings(cls) -> "PricingConfigSourceManager":
        settings = get_settings()
        if settings.pricing_config_backend == "http":
            if not settings.pricing_config_base_url:
                raise RuntimeError("PRICING_CONFIG_BASE_URL is required when PRICING_CONFIG_BACKEND=http")
            source: PricingConfigSource = HttpPricingConfigSource(
                base_url=settings.pricing_config_base_url,
                timeout=settings.pricing_config_timeout_seconds,
            )
        else:
            source = StaticPricingConfigSource()

        return cls.configure(source)

    @classmethod
    def get_instance(cls) -> "PricingConfigSourceManager":
        if cls._instance is None:
            return cls.configure_from_settings()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._instance = None

    @property
    def source(self) -> PricingConfigSource:
        return self._source

from core.config_source.http_provider import HttpPricingConfigSource
from core.config_source.manager import PricingConfigSourceManager
from core.config_source.provider import PricingConfigSource
from core.config_source.static_provider import StaticPricingConfigSource

__all__ = [
    "HttpPricingConfigSource",
    "PricingConfigSource",
    "PricingConfigSourceManager",
    "StaticPricingConfigSource",
]

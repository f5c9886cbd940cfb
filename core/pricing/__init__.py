from core.pricing.billing import apply_minimum, bill_recurring, build_quote
from core.pricing.config import default_pricing_config, load_pricing_config
from core.pricing.form_state import UnknownFormFieldError, apply_config, build_form, reduce_form
from core.pricing.frequency import resolve_frequency
from core.pricing.registry import (
    SERVICE_DEFINITIONS,
    ServiceDefinition,
    UnknownServiceError,
    UnsupportedFrequencyError,
    calculate_quote,
    get_service_definition,
)
from core.pricing.types import ContractLimits, FrequencyProfile, LineItem, PricingConfig, QuoteBreakdown

__all__ = [
    "SERVICE_DEFINITIONS",
    "ContractLimits",
    "FrequencyProfile",
    "LineItem",
    "PricingConfig",
    "QuoteBreakdown",
    "ServiceDefinition",
    "UnknownFormFieldError",
    "UnknownServiceError",
    "UnsupportedFrequencyError",
    "apply_config",
    "apply_minimum",
    "bill_recurring",
    "build_form",
    "build_quote",
    "calculate_quote",
    "default_pricing_config",
    "get_service_definition",
    "load_pricing_config",
    "reduce_form",
    "resolve_frequency",
]

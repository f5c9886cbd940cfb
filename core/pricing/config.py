from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import NonNegativeFloat, PositiveInt, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from core.pricing.types import ContractLimits, PricingConfig
from core.pricing_rules import (
    CONTRACT_DEFAULT_MONTHS,
    CONTRACT_MAX_MONTHS,
    CONTRACT_MIN_MONTHS,
    default_annual_frequencies,
    default_frequency_multipliers,
)
from schemas.imports import ConfigSource, ServiceId
from schemas.service_rates import (
    CarpetRates,
    ElectrostaticSprayRates,
    FoamingDrainRates,
    GreaseTrapRates,
    MicrofiberMoppingRates,
    PureJanitorialRates,
    RefreshPowerScrubRates,
    RpmWindowsRates,
    SaniCleanRates,
    SaniPodRates,
    SaniScrubRates,
    ServiceRates,
    StripWaxRates,
)

logger = logging.getLogger(__name__)

RATES_BY_SERVICE: dict[ServiceId, type[ServiceRates]] = {
    ServiceId.SANI_SCRUB: SaniScrubRates,
    ServiceId.SANI_CLEAN: SaniCleanRates,
    ServiceId.SANI_POD: SaniPodRates,
    ServiceId.GREASE_TRAP: GreaseTrapRates,
    ServiceId.PURE_JANITORIAL: PureJanitorialRates,
    ServiceId.MICROFIBER_MOPPING: MicrofiberMoppingRates,
    ServiceId.RPM_WINDOWS: RpmWindowsRates,
    ServiceId.CARPET_CLEANING: CarpetRates,
    ServiceId.FOAMING_DRAIN: FoamingDrainRates,
    ServiceId.STRIP_WAX: StripWaxRates,
    ServiceId.ELECTROSTATIC_SPRAY: ElectrostaticSprayRates,
    ServiceId.REFRESH_POWER_SCRUB: RefreshPowerScrubRates,
}

DEFAULT_CONTRACT_LIMITS = ContractLimits(
    min_months=CONTRACT_MIN_MONTHS,
    max_months=CONTRACT_MAX_MONTHS,
    default_months=CONTRACT_DEFAULT_MONTHS,
)

_RATE_ADAPTER: TypeAdapter[float] = TypeAdapter(NonNegativeFloat)
_MONTHS_ADAPTER: TypeAdapter[int] = TypeAdapter(PositiveInt)
_MISSING = object()

_FREQUENCY_MULTIPLIER_KEYS = ("frequencyMultipliers", "frequency_multipliers")
_ANNUAL_FREQUENCY_KEYS = ("annualFrequencies", "annual_frequencies")
_CONTRACT_KEYS = ("contractLimits", "contract_limits", "contract")
_SECTION_KEYS = frozenset(_FREQUENCY_MULTIPLIER_KEYS + _ANNUAL_FREQUENCY_KEYS + _CONTRACT_KEYS)


def rates_model_for(service_id: ServiceId) -> type[ServiceRates]:
    return RATES_BY_SERVICE[ServiceId(service_id)]


def _lookup(document: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in document:
            return document[key]
    return _MISSING


def _valid_number(raw: Any) -> float | None:
    if isinstance(raw, bool):
        return None
    try:
        return _RATE_ADAPTER.validate_python(raw)
    except ValidationError:
        return None


def _flatten_rate_groups(document: Mapping[str, Any], issues: list[str]) -> dict[str, Any]:
    """Lift the leaves of grouped rates (e.g. ``installMultipliers``) to the top level.

    Top-level keys win over grouped ones.
    """
    flat = {key: value for key, value in document.items() if key not in _SECTION_KEYS}
    for group, members in document.items():
        if group in _SECTION_KEYS or not isinstance(members, Mapping):
            continue
        for key, value in members.items():
            if key in document:
                continue
            if key in flat and not isinstance(flat[key], Mapping):
                issues.append(f"{group}.{key}: duplicate rate key, ignored")
                continue
            flat[key] = value
    return flat


def _merge_rates(
    rates_cls: type[ServiceRates],
    document: Mapping[str, Any],
    issues: list[str],
) -> ServiceRates:
    defaults = rates_cls()
    flat = _flatten_rate_groups(document, issues)
    values: dict[str, float] = {}
    for name, field in rates_cls.model_fields.items():
        raw = _lookup(flat, field.alias or to_camel(name), name)
        if raw is _MISSING:
            issues.append(f"{name}: missing, using default")
            continue
        number = _valid_number(raw)
        if number is None:
            issues.append(f"{name}: invalid value {raw!r}, using default")
            continue
        values[name] = number
    return defaults.model_copy(update=values)


def _merge_frequency_table(
    section_name: str,
    raw: Any,
    defaults: dict[str, float],
    issues: list[str],
) -> dict[str, float]:
    table = dict(defaults)
    if raw is _MISSING:
        issues.append(f"{section_name}: missing, using defaults")
        return table
    if not isinstance(raw, Mapping):
        issues.append(f"{section_name}: expected an object, using defaults")
        return table

    for key, value in raw.items():
        if key not in defaults:
            issues.append(f"{section_name}.{key}: unsupported frequency, ignored")
            continue
        number = _valid_number(value)
        if number is None:
            issues.append(f"{section_name}.{key}: invalid value {value!r}, using default")
            continue
        table[key] = number

    for key in defaults:
        if key not in raw:
            issues.append(f"{section_name}.{key}: missing, using default")
    return table


def _merge_contract_limits(raw: Any, issues: list[str]) -> ContractLimits:
    if raw is _MISSING:
        issues.append("contract_limits: missing, using defaults")
        return DEFAULT_CONTRACT_LIMITS
    if not isinstance(raw, Mapping):
        issues.append("contract_limits: expected an object, using defaults")
        return DEFAULT_CONTRACT_LIMITS

    resolved: dict[str, int] = {}
    for name, fallback in (
        ("min_months", DEFAULT_CONTRACT_LIMITS.min_months),
        ("max_months", DEFAULT_CONTRACT_LIMITS.max_months),
        ("default_months", DEFAULT_CONTRACT_LIMITS.default_months),
    ):
        value = _lookup(raw, to_camel(name), name)
        if value is _MISSING:
            issues.append(f"contract_limits.{name}: missing, using default")
            resolved[name] = fallback
            continue
        try:
            resolved[name] = _MONTHS_ADAPTER.validate_python(value)
        except ValidationError:
            issues.append(f"contract_limits.{name}: invalid value {value!r}, using default")
            resolved[name] = fallback

    if resolved["min_months"] > resolved["max_months"]:
        issues.append("contract_limits: min_months exceeds max_months, using defaults")
        return DEFAULT_CONTRACT_LIMITS

    default_months = max(resolved["min_months"], min(resolved["max_months"], resolved["default_months"]))
    if default_months != resolved["default_months"]:
        issues.append("contract_limits.default_months: outside limits, clamped")
    return ContractLimits(
        min_months=resolved["min_months"],
        max_months=resolved["max_months"],
        default_months=default_months,
    )


def default_pricing_config(service_id: ServiceId) -> PricingConfig:
    service_id = ServiceId(service_id)
    rates_cls = rates_model_for(service_id)
    return PricingConfig(
        service_id=service_id,
        rates=rates_cls(),
        frequency_multipliers=default_frequency_multipliers(**rates_cls.FREQUENCY_MULTIPLIER_OVERRIDES),
        annual_frequencies=default_annual_frequencies(**rates_cls.ANNUAL_FREQUENCY_OVERRIDES),
        contract_limits=DEFAULT_CONTRACT_LIMITS,
    )


def load_pricing_config(service_id: ServiceId, document: Any) -> PricingConfig:
    """Build a config from a rate document, falling back leaf by leaf.

    Never raises for bad content; every substituted default is listed in
    ``PricingConfig.issues``.
    """
    defaults = default_pricing_config(service_id)
    if document is None:
        return defaults
    if not isinstance(document, Mapping):
        logger.warning(
            "Pricing config for %s is not an object; using defaults",
            defaults.service_id.value,
        )
        return PricingConfig(
            service_id=defaults.service_id,
            rates=defaults.rates,
            frequency_multipliers=defaults.frequency_multipliers,
            annual_frequencies=defaults.annual_frequencies,
            contract_limits=defaults.contract_limits,
            source=ConfigSource.DEFAULT,
            issues=("document: expected an object, using defaults",),
        )

    issues: list[str] = []
    rates = _merge_rates(type(defaults.rates), document, issues)
    frequency_multipliers = _merge_frequency_table(
        "frequency_multipliers",
        _lookup(document, *_FREQUENCY_MULTIPLIER_KEYS),
        dict(defaults.frequency_multipliers),
        issues,
    )
    annual_frequencies = _merge_frequency_table(
        "annual_frequencies",
        _lookup(document, *_ANNUAL_FREQUENCY_KEYS),
        dict(defaults.annual_frequencies),
        issues,
    )
    contract_limits = _merge_contract_limits(_lookup(document, *_CONTRACT_KEYS), issues)

    if issues:
        logger.warning(
            "Pricing config for %s loaded with %d fallback field(s)",
            defaults.service_id.value,
            len(issues),
            extra={"service_id": defaults.service_id.value, "config_issues": issues},
        )
    return PricingConfig(
        service_id=defaults.service_id,
        rates=rates,
        frequency_multipliers=frequency_multipliers,
        annual_frequencies=annual_frequencies,
        contract_limits=contract_limits,
        source=ConfigSource.PARTIAL if issues else ConfigSource.REMOTE,
        issues=tuple(issues),
    )

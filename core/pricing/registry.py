from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from core.pricing.calculators import (
    calculate_carpet_quote,
    calculate_electrostatic_spray_quote,
    calculate_foaming_drain_quote,
    calculate_grease_trap_quote,
    calculate_microfiber_mopping_quote,
    calculate_pure_janitorial_quote,
    calculate_refresh_power_scrub_quote,
    calculate_rpm_windows_quote,
    calculate_saniclean_quote,
    calculate_sanipod_quote,
    calculate_saniscrub_quote,
    calculate_strip_wax_quote,
)
from core.pricing.types import PricingConfig, QuoteBreakdown
from schemas.imports import Frequency as F
from schemas.imports import ServiceId
from schemas.service_forms import (
    CarpetForm,
    ElectrostaticSprayForm,
    FoamingDrainForm,
    GreaseTrapForm,
    MicrofiberMoppingForm,
    PureJanitorialForm,
    RefreshPowerScrubForm,
    RpmWindowsForm,
    SaniCleanForm,
    SaniPodForm,
    SaniScrubForm,
    ServiceForm,
    StripWaxForm,
)

Calculator = Callable[[ServiceForm, PricingConfig], QuoteBreakdown]


class UnknownServiceError(LookupError):
    def __init__(self, service_id: str) -> None:
        super().__init__(f"Unknown service: {service_id}")
        self.service_id = service_id


class UnsupportedFrequencyError(ValueError):
    def __init__(self, service_id: ServiceId, frequency: F) -> None:
        super().__init__(f"{service_id.value} does not support frequency {frequency.value}")
        self.service_id = service_id
        self.frequency = frequency


@dataclass(frozen=True)
class ServiceDefinition:
    service_id: ServiceId
    display_name: str
    form_model: type[ServiceForm]
    calculator: Calculator
    frequencies: tuple[F, ...]

    @property
    def default_frequency(self) -> F:
        return self.form_model.model_fields["frequency"].default

    def allows(self, frequency: F) -> bool:
        return frequency in self.frequencies

    def require_frequency(self, frequency: F) -> F:
        if not self.allows(frequency):
            raise UnsupportedFrequencyError(self.service_id, frequency)
        return frequency


_ALL = tuple(F)
_CADENCED = (F.WEEKLY, F.BIWEEKLY, F.TWICE_PER_MONTH, F.MONTHLY)
_PERIODIC = (F.ONE_TIME, F.MONTHLY, F.BIMONTHLY, F.QUARTERLY, F.BIANNUAL, F.ANNUAL)

SERVICE_DEFINITIONS: dict[ServiceId, ServiceDefinition] = {
    definition.service_id: definition
    for definition in (
        ServiceDefinition(ServiceId.SANI_SCRUB, "SaniScrub", SaniScrubForm, calculate_saniscrub_quote, _ALL),
        ServiceDefinition(ServiceId.SANI_CLEAN, "SaniClean", SaniCleanForm, calculate_saniclean_quote, _CADENCED),
        ServiceDefinition(
            ServiceId.SANI_POD,
            "SaniPod",
            SaniPodForm,
            calculate_sanipod_quote,
            _CADENCED + (F.BIMONTHLY, F.QUARTERLY),
        ),
        ServiceDefinition(
            ServiceId.GREASE_TRAP,
            "Grease Trap",
            GreaseTrapForm,
            calculate_grease_trap_quote,
            (F.ONE_TIME, F.WEEKLY, F.BIWEEKLY, F.MONTHLY, F.BIMONTHLY, F.QUARTERLY, F.BIANNUAL, F.ANNUAL),
        ),
        ServiceDefinition(
            ServiceId.PURE_JANITORIAL,
            "Pure Janitorial",
            PureJanitorialForm,
            calculate_pure_janitorial_quote,
            (F.ONE_TIME,) + _CADENCED + (F.BIMONTHLY, F.QUARTERLY),
        ),
        ServiceDefinition(
            ServiceId.MICROFIBER_MOPPING,
            "Microfiber Mopping",
            MicrofiberMoppingForm,
            calculate_microfiber_mopping_quote,
            (F.WEEKLY, F.BIWEEKLY, F.MONTHLY),
        ),
        ServiceDefinition(ServiceId.RPM_WINDOWS, "RPM Windows", RpmWindowsForm, calculate_rpm_windows_quote, _ALL),
        ServiceDefinition(ServiceId.CARPET_CLEANING, "Carpet Cleaning", CarpetForm, calculate_carpet_quote, _PERIODIC),
        ServiceDefinition(
            ServiceId.FOAMING_DRAIN,
            "Foaming Drain",
            FoamingDrainForm,
            calculate_foaming_drain_quote,
            _CADENCED + (F.BIMONTHLY, F.QUARTERLY),
        ),
        ServiceDefinition(ServiceId.STRIP_WAX, "Strip & Wax", StripWaxForm, calculate_strip_wax_quote, _PERIODIC),
        ServiceDefinition(
            ServiceId.ELECTROSTATIC_SPRAY,
            "Electrostatic Spray",
            ElectrostaticSprayForm,
            calculate_electrostatic_spray_quote,
            (F.ONE_TIME,) + _CADENCED + (F.BIMONTHLY, F.QUARTERLY),
        ),
        ServiceDefinition(
            ServiceId.REFRESH_POWER_SCRUB,
            "Refresh Power Scrub",
            RefreshPowerScrubForm,
            calculate_refresh_power_scrub_quote,
            _ALL,
        ),
    )
}


def get_service_definition(service_id: ServiceId | str) -> ServiceDefinition:
    try:
        return SERVICE_DEFINITIONS[ServiceId(service_id)]
    except ValueError as exc:
        raise UnknownServiceError(str(service_id)) from exc


def calculate_quote(form: ServiceForm, config: PricingConfig) -> QuoteBreakdown:
    """Dispatch to the calculator registered for ``config.service_id``."""
    definition = get_service_definition(config.service_id)
    if not isinstance(form, definition.form_model):
        raise TypeError(
            f"{definition.display_name} expects {definition.form_model.__name__}, got {type(form).__name__}"
        )
    return definition.calculator(form, config)

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.imports import (
    Count,
    Frequency,
    JanitorialServiceType,
    KitchenSize,
    Location,
    OptionalAmount,
    PatioMode,
    Quantity,
    RateCategory,
    RefreshPricingMethod,
    SprayPricingMethod,
    StripWaxVariant,
    coerce_count,
)
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

OVERRIDE_FIELDS: tuple[str, ...] = (
    "custom_per_visit_price",
    "custom_monthly_recurring",
    "custom_first_month_price",
    "custom_contract_total",
)


class CustomOverrides(BaseModel):
    model_config = ConfigDict(extra="forbid")

    custom_per_visit_price: OptionalAmount = None
    custom_monthly_recurring: OptionalAmount = None
    custom_first_month_price: OptionalAmount = None
    custom_contract_total: OptionalAmount = None

    def active_fields(self) -> tuple[str, ...]:
        return tuple(name for name in OVERRIDE_FIELDS if getattr(self, name) is not None)


class ServiceForm(BaseModel):
    """Editable state behind one service calculator.

    ``rates`` mirrors the active pricing config and may be edited by the user.
    """

    model_config = ConfigDict(extra="forbid")

    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = ()
    FLAG_FIELDS: ClassVar[tuple[str, ...]] = ()
    OPTION_FIELDS: ClassVar[tuple[str, ...]] = ()

    frequency: Frequency = Frequency.MONTHLY
    contract_months: int | None = None
    rates: ServiceRates = Field(default_factory=ServiceRates)
    overrides: CustomOverrides = Field(default_factory=CustomOverrides)
    custom_installation_fee: OptionalAmount = None
    drafts: dict[str, str] = Field(default_factory=dict)
    notes: str = ""

    @field_validator("contract_months", mode="before")
    @classmethod
    def _coerce_contract_months(cls, value: Any) -> int | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return coerce_count(value)

    @classmethod
    def draftable_fields(cls) -> tuple[str, ...]:
        rate_type = cls.model_fields["rates"].annotation
        rate_fields = rate_type.rate_fields() if isinstance(rate_type, type) else ()
        return cls.QUANTITY_FIELDS + tuple(f"rates.{name}" for name in rate_fields)


class SaniScrubForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = ("fixture_count", "non_bathroom_sqft")
    FLAG_FIELDS: ClassVar[tuple[str, ...]] = ("include_install", "is_dirty_install", "has_sani_clean")

    fixture_count: Count = 0
    non_bathroom_sqft: Quantity = 0
    include_install: bool = False
    is_dirty_install: bool = False
    has_sani_clean: bool = False
    rates: SaniScrubRates = Field(default_factory=SaniScrubRates)


class SaniCleanForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = (
        "fixture_count",
        "luxury_dispensers",
        "urinals",
        "male_toilets",
        "female_toilets",
    )
    FLAG_FIELDS: ClassVar[tuple[str, ...]] = ("needs_parking", "is_all_inclusive")
    OPTION_FIELDS: ClassVar[tuple[str, ...]] = ("location", "rate_category")

    frequency: Frequency = Frequency.WEEKLY
    fixture_count: Count = 0
    luxury_dispensers: Count = 0
    urinals: Count = 0
    male_toilets: Count = 0
    female_toilets: Count = 0
    location: Location = Location.INSIDE_BELTWAY
    rate_category: RateCategory = RateCategory.RED
    needs_parking: bool = False
    is_all_inclusive: bool = False
    rates: SaniCleanRates = Field(default_factory=SaniCleanRates)


class SaniPodForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = (
        "pod_count",
        "recurring_bags",
        "extra_bags",
        "install_quantity",
    )
    FLAG_FIELDS: ClassVar[tuple[str, ...]] = ("is_new_install",)
    OPTION_FIELDS: ClassVar[tuple[str, ...]] = ("rate_category",)

    frequency: Frequency = Frequency.WEEKLY
    pod_count: Count = 0
    recurring_bags: Count = 0
    extra_bags: Count = 0
    install_quantity: Count = 0
    is_new_install: bool = False
    rate_category: RateCategory = RateCategory.RED
    rates: SaniPodRates = Field(default_factory=SaniPodRates)


class GreaseTrapForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = ("trap_count", "gallons")
    FLAG_FIELDS: ClassVar[tuple[str, ...]] = ("include_install",)

    trap_count: Count = 0
    gallons: Quantity = 0
    include_install: bool = False
    rates: GreaseTrapRates = Field(default_factory=GreaseTrapRates)


class PureJanitorialForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = ("manual_hours", "vacuuming_hours", "dusting_places")
    FLAG_FIELDS: ClassVar[tuple[str, ...]] = ("is_dirty_initial",)
    OPTION_FIELDS: ClassVar[tuple[str, ...]] = ("service_type", "rate_category")

    frequency: Frequency = Frequency.WEEKLY
    service_type: JanitorialServiceType = JanitorialServiceType.RECURRING
    manual_hours: Quantity = 0
    vacuuming_hours: Quantity = 0
    dusting_places: Count = 0
    is_dirty_initial: bool = False
    rate_category: RateCategory = RateCategory.RED
    rates: PureJanitorialRates = Field(default_factory=PureJanitorialRates)


class MicrofiberMoppingForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = (
        "bathroom_count",
        "huge_bathroom_sqft",
        "extra_area_sqft",
        "standalone_sqft",
    )

    frequency: Frequency = Frequency.WEEKLY
    bathroom_count: Count = 0
    huge_bathroom_sqft: Quantity = 0
    extra_area_sqft: Quantity = 0
    standalone_sqft: Quantity = 0
    rates: MicrofiberMoppingRates = Field(default_factory=MicrofiberMoppingRates)


class RpmWindowsForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = ("small_windows", "medium_windows", "large_windows")
    FLAG_FIELDS: ClassVar[tuple[str, ...]] = ("is_first_time",)
    OPTION_FIELDS: ClassVar[tuple[str, ...]] = ("rate_category",)

    frequency: Frequency = Frequency.WEEKLY
    small_windows: Count = 0
    medium_windows: Count = 0
    large_windows: Count = 0
    is_first_time: bool = False
    rate_category: RateCategory = RateCategory.RED
    rates: RpmWindowsRates = Field(default_factory=RpmWindowsRates)


class CarpetForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = ("area_sqft",)
    FLAG_FIELDS: ClassVar[tuple[str, ...]] = ("use_exact_sqft", "include_install", "is_dirty_install")

    area_sqft: Quantity = 0
    use_exact_sqft: bool = True
    include_install: bool = False
    is_dirty_install: bool = False
    rates: CarpetRates = Field(default_factory=CarpetRates)


class FoamingDrainForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = (
        "standard_drains",
        "install_drains",
        "filthy_drains",
        "grease_traps",
        "green_drains",
        "plumbing_drains",
    )
    FLAG_FIELDS: ClassVar[tuple[str, ...]] = (
        "is_filthy",
        "needs_plumbing",
        "is_all_inclusive",
        "use_small_alt_pricing",
        "use_big_account_rate",
        "charge_grease_trap_install",
    )
    OPTION_FIELDS: ClassVar[tuple[str, ...]] = ("install_frequency",)

    frequency: Frequency = Frequency.WEEKLY
    standard_drains: Count = 0
    install_drains: Count = 0
    filthy_drains: Count = 0
    grease_traps: Count = 0
    green_drains: Count = 0
    plumbing_drains: Count = 0
    install_frequency: Frequency = Frequency.WEEKLY
    is_filthy: bool = False
    needs_plumbing: bool = False
    is_all_inclusive: bool = False
    use_small_alt_pricing: bool = False
    use_big_account_rate: bool = False
    charge_grease_trap_install: bool = True
    rates: FoamingDrainRates = Field(default_factory=FoamingDrainRates)


class StripWaxForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = ("floor_sqft",)
    OPTION_FIELDS: ClassVar[tuple[str, ...]] = ("variant", "rate_category")

    frequency: Frequency = Frequency.ONE_TIME
    floor_sqft: Quantity = 0
    variant: StripWaxVariant = StripWaxVariant.STANDARD_FULL
    rate_category: RateCategory = RateCategory.RED
    rates: StripWaxRates = Field(default_factory=StripWaxRates)


class ElectrostaticSprayForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = ("room_count", "area_sqft")
    FLAG_FIELDS: ClassVar[tuple[str, ...]] = ("use_exact_sqft", "is_combined_with_sani_clean")
    OPTION_FIELDS: ClassVar[tuple[str, ...]] = ("pricing_method", "location")

    pricing_method: SprayPricingMethod = SprayPricingMethod.BY_ROOM
    room_count: Count = 0
    area_sqft: Quantity = 0
    use_exact_sqft: bool = False
    is_combined_with_sani_clean: bool = False
    location: Location = Location.INSIDE_BELTWAY
    rates: ElectrostaticSprayRates = Field(default_factory=ElectrostaticSprayRates)


REFRESH_AREAS: tuple[str, ...] = ("dumpster", "patio", "walkway", "front_of_house", "back_of_house", "other")


def _area_fields(*names: str) -> tuple[str, ...]:
    return tuple(f"{area}.{name}" for area in REFRESH_AREAS for name in names)


class RefreshAreaInput(BaseModel):
    """One area column of a Refresh Power Scrub quote; disabled areas are not billed."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    pricing_method: RefreshPricingMethod = RefreshPricingMethod.AREA_SPECIFIC
    workers: Count = 2
    hours: Quantity = 0
    inside_sqft: Quantity = 0
    outside_sqft: Quantity = 0
    kitchen_size: KitchenSize = KitchenSize.SMALL_MEDIUM
    patio_mode: PatioMode = PatioMode.STANDALONE


class RefreshPowerScrubForm(ServiceForm):
    QUANTITY_FIELDS: ClassVar[tuple[str, ...]] = _area_fields("workers", "hours", "inside_sqft", "outside_sqft")
    FLAG_FIELDS: ClassVar[tuple[str, ...]] = _area_fields("enabled")
    OPTION_FIELDS: ClassVar[tuple[str, ...]] = ("rate_category",) + _area_fields(
        "pricing_method", "kitchen_size", "patio_mode"
    )

    frequency: Frequency = Frequency.ONE_TIME
    rate_category: RateCategory = RateCategory.RED
    dumpster: RefreshAreaInput = Field(default_factory=RefreshAreaInput)
    patio: RefreshAreaInput = Field(default_factory=RefreshAreaInput)
    walkway: RefreshAreaInput = Field(default_factory=RefreshAreaInput)
    front_of_house: RefreshAreaInput = Field(default_factory=RefreshAreaInput)
    back_of_house: RefreshAreaInput = Field(default_factory=lambda: RefreshAreaInput(kitchen_size=KitchenSize.LARGE))
    other: RefreshAreaInput = Field(default_factory=RefreshAreaInput)
    rates: RefreshPowerScrubRates = Field(default_factory=RefreshPowerScrubRates)

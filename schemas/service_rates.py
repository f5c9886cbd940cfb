from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from schemas.imports import Quantity, RateCategory, StripWaxVariant


class ServiceRates(BaseModel):
    """Numeric rate leaves of a service's pricing document.

    Remote documents use camelCase keys; field names are accepted too.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    FREQUENCY_MULTIPLIER_OVERRIDES: ClassVar[dict[str, float]] = {}
    ANNUAL_FREQUENCY_OVERRIDES: ClassVar[dict[str, float]] = {}

    @classmethod
    def rate_fields(cls) -> tuple[str, ...]:
        return tuple(cls.model_fields)


class RateCategoryRates(ServiceRates):
    red_rate_multiplier: Quantity = 1.0
    green_rate_multiplier: Quantity = 1.3

    def category_multiplier(self, category: RateCategory) -> float:
        if category == RateCategory.GREEN:
            return self.green_rate_multiplier
        return self.red_rate_multiplier


class SaniScrubRates(ServiceRates):
    monthly_rate_per_fixture: Quantity = 25
    bimonthly_rate_per_fixture: Quantity = 35
    quarterly_rate_per_fixture: Quantity = 40
    monthly_minimum: Quantity = 175
    bimonthly_minimum: Quantity = 250
    quarterly_minimum: Quantity = 250
    non_bathroom_unit_sqft: Quantity = 500
    non_bathroom_first_unit_rate: Quantity = 250
    non_bathroom_additional_unit_rate: Quantity = 125
    install_multiplier_dirty: Quantity = 3
    install_multiplier_clean: Quantity = 1
    twice_per_month_discount: Quantity = 15


class SaniCleanRates(RateCategoryRates):
    FREQUENCY_MULTIPLIER_OVERRIDES: ClassVar[dict[str, float]] = {"weekly": 4.2}
    ANNUAL_FREQUENCY_OVERRIDES: ClassVar[dict[str, float]] = {"weekly": 50}

    inside_beltway_rate_per_fixture: Quantity = 7
    outside_beltway_rate_per_fixture: Quantity = 6
    weekly_minimum: Quantity = 40
    trip_charge: Quantity = 8
    parking_charge: Quantity = 7
    small_facility_threshold: Quantity = 5
    small_facility_minimum: Quantity = 50
    all_inclusive_rate_per_fixture: Quantity = 20
    luxury_soap_rate_per_dispenser: Quantity = 5
    urinal_monthly_charge: Quantity = 16
    male_toilet_monthly_charge: Quantity = 4
    female_toilet_monthly_charge: Quantity = 4


class SaniPodRates(RateCategoryRates):
    rate_per_pod: Quantity = 8
    base_rate_per_pod: Quantity = 3
    base_weekly_charge: Quantity = 40
    extra_bag_rate: Quantity = 2
    install_rate_per_pod: Quantity = 25


class GreaseTrapRates(ServiceRates):
    per_trap_rate: Quantity = 125
    per_gallon_rate: Quantity = 0.5
    minimum_per_visit: Quantity = 125
    install_rate_per_trap: Quantity = 300


class PureJanitorialRates(RateCategoryRates):
    recurring_hourly_rate: Quantity = 30
    short_job_hourly_rate: Quantity = 50
    minimum_hours: Quantity = 4
    dusting_places_per_hour: Quantity = 30
    dirty_initial_multiplier: Quantity = 3


class MicrofiberMoppingRates(ServiceRates):
    bathroom_rate: Quantity = 10
    huge_bathroom_unit_sqft: Quantity = 300
    huge_bathroom_rate_per_unit: Quantity = 10
    extra_area_unit_sqft: Quantity = 400
    extra_area_rate_per_unit: Quantity = 10
    extra_area_minimum: Quantity = 100
    standalone_unit_sqft: Quantity = 200
    standalone_rate_per_unit: Quantity = 10
    standalone_minimum: Quantity = 40


class RpmWindowsRates(RateCategoryRates):
    small_window_rate: Quantity = 1.5
    medium_window_rate: Quantity = 3
    large_window_rate: Quantity = 7
    trip_charge: Quantity = 8
    install_multiplier: Quantity = 3
    weekly_rate_multiplier: Quantity = 1
    biweekly_rate_multiplier: Quantity = 1.25
    monthly_rate_multiplier: Quantity = 1.25
    quarterly_rate_multiplier: Quantity = 2


class CarpetRates(ServiceRates):
    unit_sqft: Quantity = 500
    first_unit_rate: Quantity = 250
    additional_unit_rate: Quantity = 125
    minimum_per_visit: Quantity = 250
    install_multiplier_dirty: Quantity = 3
    install_multiplier_clean: Quantity = 1


class FoamingDrainRates(ServiceRates):
    standard_drain_rate: Quantity = 10
    alt_base_charge: Quantity = 20
    alt_extra_per_drain: Quantity = 4
    volume_minimum_drains: Quantity = 10
    volume_weekly_rate: Quantity = 20
    volume_bimonthly_rate: Quantity = 10
    grease_weekly_rate: Quantity = 125
    grease_install_rate: Quantity = 300
    green_weekly_rate: Quantity = 5
    green_install_rate: Quantity = 100
    plumbing_addon_rate: Quantity = 10
    filthy_multiplier: Quantity = 3
    minimum_charge_per_visit: Quantity = 50


class StripWaxRates(RateCategoryRates):
    standard_full_rate_per_sqft: Quantity = 0.75
    standard_full_minimum: Quantity = 550
    no_sealant_rate_per_sqft: Quantity = 0.70
    no_sealant_minimum: Quantity = 550
    well_maintained_rate_per_sqft: Quantity = 0.40
    well_maintained_minimum: Quantity = 400

    def variant_pricing(self, variant: StripWaxVariant) -> tuple[float, float]:
        if variant == StripWaxVariant.NO_SEALANT:
            return self.no_sealant_rate_per_sqft, self.no_sealant_minimum
        if variant == StripWaxVariant.WELL_MAINTAINED:
            return self.well_maintained_rate_per_sqft, self.well_maintained_minimum
        return self.standard_full_rate_per_sqft, self.standard_full_minimum


class ElectrostaticSprayRates(ServiceRates):
    rate_per_room: Quantity = 20
    rate_per_thousand_sqft: Quantity = 50
    sqft_unit: Quantity = 1000
    trip_charge_inside_beltway: Quantity = 10
    trip_charge_outside_beltway: Quantity = 0


class RefreshPowerScrubRates(RateCategoryRates):
    hourly_rate: Quantity = 200
    trip_charge: Quantity = 75
    minimum_visit: Quantity = 475
    kitchen_small_medium_rate: Quantity = 1500
    kitchen_large_rate: Quantity = 2500
    front_of_house_rate: Quantity = 2500
    patio_standalone_rate: Quantity = 875
    patio_upsell_rate: Quantity = 500
    sqft_fixed_fee: Quantity = 200
    inside_sqft_rate: Quantity = 0.6
    outside_sqft_rate: Quantity = 0.4

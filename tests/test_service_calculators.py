from __future__ import annotations

import pytest

from core.pricing import calculate_quote, default_pricing_config
from schemas.imports import (
    Frequency,
    JanitorialServiceType,
    Location,
    RateCategory,
    ServiceId,
    SprayPricingMethod,
    StripWaxVariant,
)
from schemas.service_forms import (
    CarpetForm,
    ElectrostaticSprayForm,
    FoamingDrainForm,
    GreaseTrapForm,
    MicrofiberMoppingForm,
    PureJanitorialForm,
    RpmWindowsForm,
    SaniCleanForm,
    SaniPodForm,
    StripWaxForm,
)


def _quote(service_id: ServiceId, form):
    return calculate_quote(form, default_pricing_config(service_id))


def test_saniclean_inside_beltway_adds_trip():
    quote = _quote(ServiceId.SANI_CLEAN, SaniCleanForm(fixture_count=10, contract_months=12))

    assert quote.per_visit == 78
    assert quote.monthly_recurring == pytest.approx(78 * 4.2)
    assert quote.contract_total == pytest.approx(78 * 4.2 * 12)


def test_saniclean_outside_beltway_rate():
    form = SaniCleanForm(fixture_count=10, location=Location.OUTSIDE_BELTWAY)

    assert _quote(ServiceId.SANI_CLEAN, form).per_visit == 68


def test_saniclean_small_facility_minimum():
    assert _quote(ServiceId.SANI_CLEAN, SaniCleanForm(fixture_count=4)).per_visit == 50


def test_saniclean_all_inclusive():
    form = SaniCleanForm(fixture_count=10, is_all_inclusive=True, urinals=3)
    quote = _quote(ServiceId.SANI_CLEAN, form)

    assert quote.per_visit == 200
    assert quote.monthly_recurring == pytest.approx(200 * 4.2)


def test_saniclean_green_rate_category():
    form = SaniCleanForm(fixture_count=10, rate_category=RateCategory.GREEN)

    assert _quote(ServiceId.SANI_CLEAN, form).per_visit == pytest.approx(78 * 1.3)


def test_saniclean_monthly_components_are_added_once_per_month():
    form = SaniCleanForm(fixture_count=10, urinals=2, male_toilets=1, female_toilets=1)
    quote = _quote(ServiceId.SANI_CLEAN, form)

    assert quote.monthly_recurring == pytest.approx(78 * 4.2 + 40)


def test_saniclean_no_fixtures_no_charge():
    form = SaniCleanForm(fixture_count=0, urinals=4, luxury_dispensers=2)

    assert _quote(ServiceId.SANI_CLEAN, form).is_active is False


def test_sanipod_per_pod_rate_for_small_counts():
    assert _quote(ServiceId.SANI_POD, SaniPodForm(pod_count=4)).per_visit == 32


def test_sanipod_base_rate_for_large_counts():
    assert _quote(ServiceId.SANI_POD, SaniPodForm(pod_count=20)).per_visit == 100


def test_sanipod_recurring_bags():
    assert _quote(ServiceId.SANI_POD, SaniPodForm(pod_count=4, recurring_bags=3)).per_visit == 38


def test_sanipod_new_install():
    form = SaniPodForm(pod_count=4, is_new_install=True, install_quantity=4, extra_bags=5)
    quote = _quote(ServiceId.SANI_POD, form)

    assert quote.install_fee == 110
    assert quote.first_period_total == pytest.approx(110 + 3.33 * 32)


def test_grease_trap_traps_and_gallons():
    form = GreaseTrapForm(trap_count=2, gallons=100)

    assert _quote(ServiceId.GREASE_TRAP, form).per_visit == 300


def test_grease_trap_minimum_per_visit():
    config = default_pricing_config(ServiceId.GREASE_TRAP)
    form = GreaseTrapForm(trap_count=1, rates=config.rates.model_copy(update={"minimum_per_visit": 200}))

    assert calculate_quote(form, config).per_visit == 200


def test_grease_trap_empty_form():
    assert _quote(ServiceId.GREASE_TRAP, GreaseTrapForm()).is_active is False


def test_grease_trap_quarterly_install():
    form = GreaseTrapForm(
        trap_count=2,
        gallons=100,
        include_install=True,
        frequency=Frequency.QUARTERLY,
        contract_months=12,
    )
    quote = _quote(ServiceId.GREASE_TRAP, form)

    assert quote.install_fee == 600
    assert quote.contract_total == 600 + 3 * 300


def test_janitorial_minimum_hours():
    assert _quote(ServiceId.PURE_JANITORIAL, PureJanitorialForm(manual_hours=2)).per_visit == 120


def test_janitorial_hours_above_minimum():
    assert _quote(ServiceId.PURE_JANITORIAL, PureJanitorialForm(manual_hours=6)).per_visit == 180


def test_janitorial_dusting_places_convert_to_hours():
    form = PureJanitorialForm(manual_hours=3, dusting_places=60)

    assert _quote(ServiceId.PURE_JANITORIAL, form).per_visit == 150


def test_janitorial_one_time_service_type_bills_once():
    form = PureJanitorialForm(manual_hours=2, service_type=JanitorialServiceType.ONE_TIME)
    quote = _quote(ServiceId.PURE_JANITORIAL, form)

    assert quote.per_visit == 200
    assert quote.frequency == Frequency.ONE_TIME
    assert quote.first_period_total == quote.contract_total == 200


def test_janitorial_dirty_initial_visit():
    form = PureJanitorialForm(manual_hours=6, is_dirty_initial=True)
    quote = _quote(ServiceId.PURE_JANITORIAL, form)

    assert quote.install_fee == 540
    assert quote.first_period_total == pytest.approx(540 + 3.33 * 180)


def test_mopping_bathrooms():
    assert _quote(ServiceId.MICROFIBER_MOPPING, MicrofiberMoppingForm(bathroom_count=3)).per_visit == 30


def test_mopping_huge_bathroom_blocks():
    form = MicrofiberMoppingForm(huge_bathroom_sqft=650)

    assert _quote(ServiceId.MICROFIBER_MOPPING, form).per_visit == 30


def test_mopping_extra_area_minimum():
    form = MicrofiberMoppingForm(extra_area_sqft=500)

    assert _quote(ServiceId.MICROFIBER_MOPPING, form).per_visit == 100


def test_mopping_standalone_area():
    form = MicrofiberMoppingForm(standalone_sqft=900)

    assert _quote(ServiceId.MICROFIBER_MOPPING, form).per_visit == 50


@pytest.mark.parametrize(
    "frequency, expected",
    [(Frequency.WEEKLY, 52), (Frequency.BIWEEKLY, 65), (Frequency.MONTHLY, 65), (Frequency.QUARTERLY, 104)],
)
def test_rpm_windows_frequency_adjusts_per_visit(frequency: Frequency, expected: float):
    form = RpmWindowsForm(small_windows=10, medium_windows=5, large_windows=2, frequency=frequency)

    assert _quote(ServiceId.RPM_WINDOWS, form).per_visit == pytest.approx(expected)


def test_rpm_windows_no_windows_no_trip():
    assert _quote(ServiceId.RPM_WINDOWS, RpmWindowsForm()).per_visit == 0


def test_rpm_windows_first_time_install():
    form = RpmWindowsForm(small_windows=10, medium_windows=5, large_windows=2, is_first_time=True)
    quote = _quote(ServiceId.RPM_WINDOWS, form)

    assert quote.install_fee == pytest.approx(156)
    assert quote.first_period_total == pytest.approx(156 + 3.33 * 52)


def test_carpet_first_block():
    assert _quote(ServiceId.CARPET_CLEANING, CarpetForm(area_sqft=400)).per_visit == 250


def test_carpet_additional_blocks():
    form = CarpetForm(area_sqft=1200, use_exact_sqft=False)

    assert _quote(ServiceId.CARPET_CLEANING, form).per_visit == 500


def test_carpet_exact_square_footage_by_default():
    form = CarpetForm(area_sqft=1200)

    assert form.use_exact_sqft is True
    assert _quote(ServiceId.CARPET_CLEANING, form).per_visit == pytest.approx(425)


def test_carpet_quarterly_dirty_install():
    form = CarpetForm(
        area_sqft=1000,
        include_install=True,
        is_dirty_install=True,
        frequency=Frequency.QUARTERLY,
        contract_months=12,
    )
    quote = _quote(ServiceId.CARPET_CLEANING, form)

    assert quote.install_fee == 1125
    assert quote.contract_total == 1125 + 3 * 375


def test_foaming_drain_small_account_hits_minimum():
    assert _quote(ServiceId.FOAMING_DRAIN, FoamingDrainForm(standard_drains=3)).per_visit == 50


def test_foaming_drain_alternative_pricing_when_cheaper():
    assert _quote(ServiceId.FOAMING_DRAIN, FoamingDrainForm(standard_drains=10)).per_visit == 60


def test_foaming_drain_big_account_rate_skips_alternative():
    form = FoamingDrainForm(standard_drains=10, use_big_account_rate=True)

    assert _quote(ServiceId.FOAMING_DRAIN, form).per_visit == 100


def test_foaming_drain_volume_install_program():
    form = FoamingDrainForm(standard_drains=12, install_drains=12)

    assert _quote(ServiceId.FOAMING_DRAIN, form).per_visit == 240


def test_foaming_drain_bimonthly_install_program_rate():
    form = FoamingDrainForm(standard_drains=12, install_drains=12, install_frequency=Frequency.BIMONTHLY)

    assert _quote(ServiceId.FOAMING_DRAIN, form).per_visit == 120


def test_foaming_drain_grease_traps_and_install():
    quote = _quote(ServiceId.FOAMING_DRAIN, FoamingDrainForm(grease_traps=2))

    assert quote.per_visit == 250
    assert quote.install_fee == 600


def test_foaming_drain_grease_install_can_be_waived():
    form = FoamingDrainForm(grease_traps=2, charge_grease_trap_install=False)

    assert _quote(ServiceId.FOAMING_DRAIN, form).install_fee == 0


def test_foaming_drain_all_inclusive_bills_green_drains_only():
    form = FoamingDrainForm(standard_drains=10, green_drains=10, is_all_inclusive=True)
    quote = _quote(ServiceId.FOAMING_DRAIN, form)

    assert quote.per_visit == 50
    assert quote.install_fee == 1000


def test_foaming_drain_filthy_install():
    form = FoamingDrainForm(standard_drains=4, is_filthy=True)
    quote = _quote(ServiceId.FOAMING_DRAIN, form)

    assert quote.install_fee == 108
    assert quote.first_period_total == pytest.approx(108 + 3.33 * 50)


def test_strip_wax_standard_full():
    assert _quote(ServiceId.STRIP_WAX, StripWaxForm(floor_sqft=1000)).per_visit == 750


def test_strip_wax_minimum():
    assert _quote(ServiceId.STRIP_WAX, StripWaxForm(floor_sqft=500)).per_visit == 550


def test_strip_wax_well_maintained_minimum():
    form = StripWaxForm(floor_sqft=500, variant=StripWaxVariant.WELL_MAINTAINED)

    assert _quote(ServiceId.STRIP_WAX, form).per_visit == 400


def test_strip_wax_green_rate():
    form = StripWaxForm(floor_sqft=1000, rate_category=RateCategory.GREEN)

    assert _quote(ServiceId.STRIP_WAX, form).per_visit == pytest.approx(975)


def test_strip_wax_one_time_by_default():
    quote = _quote(ServiceId.STRIP_WAX, StripWaxForm(floor_sqft=1000))

    assert quote.contract_total == 750
    assert quote.monthly_recurring == 0


def test_electrostatic_by_room_with_trip():
    assert _quote(ServiceId.ELECTROSTATIC_SPRAY, ElectrostaticSprayForm(room_count=10)).per_visit == 210


def test_electrostatic_combined_with_sani_clean_waives_trip():
    form = ElectrostaticSprayForm(room_count=10, is_combined_with_sani_clean=True)

    assert _quote(ServiceId.ELECTROSTATIC_SPRAY, form).per_visit == 200


def test_electrostatic_by_square_foot_blocks():
    form = ElectrostaticSprayForm(pricing_method=SprayPricingMethod.BY_SQFT, area_sqft=2500)

    assert _quote(ServiceId.ELECTROSTATIC_SPRAY, form).per_visit == 160


def test_electrostatic_by_exact_square_foot():
    form = ElectrostaticSprayForm(pricing_method=SprayPricingMethod.BY_SQFT, area_sqft=2500, use_exact_sqft=True)

    assert _quote(ServiceId.ELECTROSTATIC_SPRAY, form).per_visit == pytest.approx(135)


def test_electrostatic_empty_form_has_no_trip():
    assert _quote(ServiceId.ELECTROSTATIC_SPRAY, ElectrostaticSprayForm()).per_visit == 0


def test_calculate_quote_rejects_mismatched_form():
    with pytest.raises(TypeError):
        calculate_quote(CarpetForm(area_sqft=100), default_pricing_config(ServiceId.SANI_SCRUB))

from __future__ import annotations

from core.pricing.billing import build_quote
from core.pricing.types import LineItem, PricingConfig, QuoteBreakdown
from schemas.imports import Location
from schemas.service_forms import SaniCleanForm


def calculate_saniclean_quote(form: SaniCleanForm, config: PricingConfig) -> QuoteBreakdown:
    rates = form.rates
    fixtures = form.fixture_count
    category_multiplier = rates.category_multiplier(form.rate_category)
    line_items: list[LineItem] = []

    service = 0.0
    if fixtures > 0:
        if form.is_all_inclusive:
            service = fixtures * rates.all_inclusive_rate_per_fixture
            line_items.append(
                LineItem("All-inclusive fixtures", service, f"{fixtures} x ${rates.all_inclusive_rate_per_fixture:g}")
            )
        else:
            rate = (
                rates.inside_beltway_rate_per_fixture
                if form.location == Location.INSIDE_BELTWAY
                else rates.outside_beltway_rate_per_fixture
            )
            fixture_charge = fixtures * rate
            if fixtures <= rates.small_facility_threshold:
                # Small facility minimum already covers the trip.
                service = max(fixture_charge, rates.small_facility_minimum)
                line_items.append(
                    LineItem("Fixtures", service, f"{fixtures} x ${rate:g}, small facility minimum ${rates.small_facility_minimum:g}")
                )
            else:
                fixture_charge = max(fixture_charge, rates.weekly_minimum)
                line_items.append(LineItem("Fixtures", fixture_charge, f"{fixtures} x ${rate:g}"))
                line_items.append(LineItem("Trip charge", rates.trip_charge))
                service = fixture_charge + rates.trip_charge
            if form.needs_parking:
                service += rates.parking_charge
                line_items.append(LineItem("Parking", rates.parking_charge))

    luxury = form.luxury_dispensers * rates.luxury_soap_rate_per_dispenser if fixtures > 0 else 0.0
    if luxury:
        line_items.append(LineItem("Luxury soap upgrade", luxury, f"{form.luxury_dispensers} dispensers"))

    per_visit = (service + luxury) * category_multiplier

    monthly_extras = 0.0
    if fixtures > 0 and not form.is_all_inclusive:
        monthly_extras = (
            form.urinals * rates.urinal_monthly_charge
            + form.male_toilets * rates.male_toilet_monthly_charge
            + form.female_toilets * rates.female_toilet_monthly_charge
        )
        if monthly_extras:
            line_items.append(LineItem("Monthly facility components", monthly_extras, "per month"))

    return build_quote(
        form,
        config,
        base_amount=per_visit,
        monthly_extras=monthly_extras,
        line_items=line_items,
    )

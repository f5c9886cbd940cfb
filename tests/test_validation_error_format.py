from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.validation_errors import format_validation_error_details
from schemas.quote import ProposalRequest
from schemas.service_forms import SaniScrubForm


def _errors(model, payload) -> list[dict]:
    with pytest.raises(ValidationError) as excinfo:
        model.model_validate(payload)
    return excinfo.value.errors()


def test_proposal_without_services_lists_missing_field():
    details = format_validation_error_details(_errors(ProposalRequest, {"use_remote_config": True}))

    assert details["summary"] == "Validation failed: missing required field: services."
    assert details["missingFields"] == ["services"]
    assert details["fieldErrors"][0]["location"] == "body"
    assert details["fieldErrors"][0]["errorType"] == "missing"


def test_unknown_frequency_on_form_is_a_form_error():
    details = format_validation_error_details(
        _errors(SaniScrubForm, {"fixture_count": 10, "frequency": "daily"}),
        location="form",
    )

    assert details["summary"] == "Validation failed for 1 field."
    assert details["missingFields"] == []
    assert details["fieldErrors"][0]["path"] == "frequency"
    assert details["fieldErrors"][0]["location"] == "form"
    assert details["fieldErrors"][0]["errorType"] == "enum"


def test_nested_override_typo_keeps_dotted_path():
    details = format_validation_error_details(
        _errors(SaniScrubForm, {"overrides": {"custom_discount": 50}}),
        location="form",
    )

    assert details["fieldErrors"] == [
        {
            "path": "overrides.custom_discount",
            "location": "form",
            "message": "Extra inputs are not permitted",
            "errorType": "extra_forbidden",
        }
    ]


def test_missing_service_ids_include_list_index():
    payload = {"services": [{"form": {}}, {"service_id": "carpetCleaning"}, {"form": {"area_sqft": 400}}]}

    details = format_validation_error_details(_errors(ProposalRequest, payload))

    assert details["missingFields"] == ["services.0.service_id", "services.2.service_id"]
    assert details["summary"] == (
        "Validation failed: missing required fields: services.0.service_id, services.2.service_id."
    )


def test_request_location_prefix_is_split_off():
    errors = [
        {"type": "missing", "loc": ("body", "services", 0, "service_id"), "msg": "Field required", "input": {}},
        {"type": "missing", "loc": ("body", "services", 0, "service_id"), "msg": "Field required", "input": {}},
    ]

    details = format_validation_error_details(errors, location="form")

    assert details["missingFields"] == ["services.0.service_id"]
    assert {error["location"] for error in details["fieldErrors"]} == {"body"}


def test_non_object_form_reports_root():
    details = format_validation_error_details(_errors(SaniScrubForm, ["fixture_count", 10]), location="form")

    assert details["fieldErrors"][0]["path"] == "(root)"
    assert details["fieldErrors"][0]["errorType"] == "model_type"

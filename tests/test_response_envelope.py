from fastapi import HTTPException

from core.errors import unsupported_frequency
from core.response_envelope import error_payload, http_exception_response, success_payload


def test_success_payload_includes_request_id():
    payload = success_payload(
        data={"value": 1},
        message="ok",
        request_id="req-123",
    )
    assert payload["success"] is True
    assert payload["data"] == {"value": 1}
    assert payload["requestId"] == "req-123"


def test_success_payload_omits_missing_request_id():
    assert "requestId" not in success_payload(data=None)


def test_error_payload_includes_request_id():
    payload = error_payload(
        message="failed",
        data={"code": "X"},
        request_id="req-999",
    )
    assert payload["success"] is False
    assert payload["data"]["code"] == "X"
    assert payload["requestId"] == "req-999"


def test_app_exception_detail_becomes_envelope():
    response = http_exception_response(unsupported_frequency("saniclean", "quarterly", ["weekly"]))

    assert response.status_code == 422
    assert b'"code":"UNSUPPORTED_FREQUENCY"' in response.body
    assert b'"message":"Frequency is not offered for this service"' in response.body


def test_plain_http_exception_detail_is_message():
    response = http_exception_response(HTTPException(status_code=404, detail="Not Found"))

    assert response.status_code == 404
    assert b'"message":"Not Found"' in response.body
    assert b'"code":"HTTP_EXCEPTION"' in response.body

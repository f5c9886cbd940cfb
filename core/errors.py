from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, status


class ErrorCode(str, Enum):
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNSUPPORTED_FREQUENCY = "UNSUPPORTED_FREQUENCY"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(HTTPException):
    def __init__(
        self,
        *,
        status_code: int,
        code: ErrorCode,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        detail = {
            "message": message,
            "code": code.value,
            "details": details,
        }
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class PricingConfigError(Exception):
    """Raised by config sources; calculators recover from it locally."""

    def __init__(self, service_id: str, reason: str) -> None:
        super().__init__(f"{service_id}: {reason}")
        self.service_id = service_id
        self.reason = reason


class ConfigUnavailableError(PricingConfigError):
    pass


class MalformedConfigError(PricingConfigError):
    pass


def resource_not_found(resource: str, resource_id: str | None = None) -> AppException:
    details = {"resource": resource}
    if resource_id:
        details["resource_id"] = resource_id
    return AppException(
        status_code=status.HTTP_404_NOT_FOUND,
        code=ErrorCode.RESOURCE_NOT_FOUND,
        message=f"{resource} not found",
        details=details,
    )


def validation_failed(message: str, details: Any | None = None) -> AppException:
    return AppException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        code=ErrorCode.VALIDATION_FAILED,
        message=message,
        details=details,
    )


def unsupported_frequency(service_id: str, frequency: str, allowed: list[str]) -> AppException:
    return AppException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        code=ErrorCode.UNSUPPORTED_FREQUENCY,
        message="Frequency is not offered for this service",
        details={"service_id": service_id, "frequency": frequency, "allowed": allowed},
    )

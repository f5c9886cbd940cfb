from __future__ import annotations

from typing import Any, Iterable, Sequence


_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _split_location(location_parts: Iterable[Any], default_location: str) -> tuple[str, str]:
    parts = [str(part) for part in location_parts]
    if parts and parts[0] in _REQUEST_LOCATIONS:
        location, path_parts = parts[0], parts[1:]
    else:
        location, path_parts = default_location, parts
    return location, ".".join(path_parts) or "(root)"


def _summary(missing_fields: Sequence[str], error_count: int) -> str:
    if missing_fields:
        noun = "field" if len(missing_fields) == 1 else "fields"
        return f"Validation failed: missing required {noun}: {', '.join(missing_fields)}."
    noun = "field" if error_count == 1 else "fields"
    return f"Validation failed for {error_count} {noun}."


def format_validation_error_details(
    errors: Sequence[dict[str, Any]],
    *,
    location: str = "body",
) -> dict[str, Any]:
    """Flatten pydantic errors for request bodies and calculator forms alike."""
    field_errors: list[dict[str, str]] = []
    missing_fields: list[str] = []

    for error in errors:
        raw_loc = error.get("loc") or ()
        if not isinstance(raw_loc, (list, tuple)):
            raw_loc = (raw_loc,)
        error_location, path = _split_location(raw_loc, location)
        error_type = str(error.get("type", "validation_error"))

        field_errors.append(
            {
                "path": path,
                "location": error_location,
                "message": str(error.get("msg", "Invalid value")),
                "errorType": error_type,
            }
        )
        if error_type == "missing" and path not in missing_fields:
            missing_fields.append(path)

    return {
        "summary": _summary(missing_fields, len(field_errors)),
        "missingFields": missing_fields,
        "fieldErrors": field_errors,
    }

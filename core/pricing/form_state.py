from __future__ import annotations

import logging
from typing import Any, Mapping, TypeVar

from core.pricing.types import PricingConfig
from schemas.form_actions import (
    ClearOverride,
    CommitDraft,
    EditDraft,
    FormAction,
    SetContractMonths,
    SetFlag,
    SetFrequency,
    SetNotes,
    SetOption,
    SetOverride,
    SetQuantity,
    SetRate,
)
from schemas.imports import coerce_count, coerce_non_negative, coerce_optional_amount
from schemas.service_forms import OVERRIDE_FIELDS, CustomOverrides, ServiceForm
from schemas.service_rates import ServiceRates

logger = logging.getLogger(__name__)

FormT = TypeVar("FormT", bound=ServiceForm)

INSTALL_OVERRIDE_FIELD = "custom_installation_fee"
RATE_DRAFT_PREFIX = "rates."


class UnknownFormFieldError(ValueError):
    def __init__(self, form: ServiceForm, field: str, kind: str) -> None:
        super().__init__(f"{type(form).__name__} has no {kind} field '{field}'")
        self.field = field
        self.kind = kind


def _replace(form: FormT, field: str, value: Any) -> FormT:
    """Revalidate ``form`` with ``field`` set; dotted names reach nested inputs."""
    data = form.model_dump()
    *parents, leaf = field.split(".")
    target = data
    for name in parents:
        target = target[name]
    target[leaf] = value
    return type(form).model_validate(data)


def clear_overrides(form: FormT) -> FormT:
    if not form.overrides.active_fields() and form.custom_installation_fee is None:
        return form
    return form.model_copy(update={"overrides": CustomOverrides(), INSTALL_OVERRIDE_FIELD: None})


def _base_input_changed(previous: FormT, updated: FormT) -> FormT:
    """A changed base input drops every pinned total."""
    if updated.model_dump(exclude={"overrides", "drafts", "notes", "contract_months"}) == previous.model_dump(
        exclude={"overrides", "drafts", "notes", "contract_months"}
    ):
        return updated
    return clear_overrides(updated)


def rate_field_name(rates_model: type[ServiceRates], key: str) -> str | None:
    for name, field in rates_model.model_fields.items():
        if key == name or key == field.alias:
            return name
    return None


def _require(form: ServiceForm, field: str, allowed: tuple[str, ...], kind: str) -> None:
    if field not in allowed:
        raise UnknownFormFieldError(form, field, kind)


def _set_quantity(form: FormT, field: str, value: Any) -> FormT:
    _require(form, field, type(form).QUANTITY_FIELDS, "quantity")
    return _base_input_changed(form, _replace(form, field, value))


def _set_rate(form: FormT, field: str, value: Any) -> FormT:
    name = rate_field_name(type(form.rates), field)
    if name is None:
        raise UnknownFormFieldError(form, field, "rate")
    rates = form.rates.model_copy(update={name: coerce_non_negative(value)})
    return _base_input_changed(form, form.model_copy(update={"rates": rates}))


def _set_override(form: FormT, field: str, value: float | None) -> FormT:
    if field == INSTALL_OVERRIDE_FIELD:
        return form.model_copy(update={INSTALL_OVERRIDE_FIELD: value})
    _require(form, field, OVERRIDE_FIELDS, "override")
    overrides = form.overrides.model_copy(update={field: value})
    return form.model_copy(update={"overrides": overrides})


def _commit_draft(form: FormT, field: str) -> FormT:
    if field not in form.drafts:
        return form
    drafts = {key: text for key, text in form.drafts.items() if key != field}
    text = form.drafts[field]
    form = form.model_copy(update={"drafts": drafts})
    if field.startswith(RATE_DRAFT_PREFIX):
        return _set_rate(form, field[len(RATE_DRAFT_PREFIX):], text)
    return _set_quantity(form, field, text)


def reduce_form(form: FormT, action: FormAction, config: PricingConfig) -> FormT:
    """Return the form that results from applying ``action``.

    Numeric input is coerced, never rejected; changing a base input
    (quantity, frequency, flag, option or rate) clears all custom overrides.
    """
    if isinstance(action, SetQuantity):
        return _set_quantity(form, action.field, action.value)

    if isinstance(action, SetFrequency):
        if action.value == form.frequency:
            return form
        return clear_overrides(form.model_copy(update={"frequency": action.value}))

    if isinstance(action, SetContractMonths):
        raw = action.value
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            months = config.contract_limits.default_months
        else:
            months = config.contract_limits.clamp(coerce_count(raw))
        return form.model_copy(update={"contract_months": months})

    if isinstance(action, SetFlag):
        _require(form, action.field, type(form).FLAG_FIELDS, "flag")
        return _base_input_changed(form, _replace(form, action.field, action.value))

    if isinstance(action, SetOption):
        _require(form, action.field, type(form).OPTION_FIELDS, "option")
        return _base_input_changed(form, _replace(form, action.field, action.value))

    if isinstance(action, SetRate):
        return _set_rate(form, action.field, action.value)

    if isinstance(action, SetOverride):
        return _set_override(form, action.field, coerce_optional_amount(action.value))

    if isinstance(action, ClearOverride):
        return _set_override(form, action.field, None)

    if isinstance(action, EditDraft):
        _require(form, action.field, type(form).draftable_fields(), "draftable")
        return form.model_copy(update={"drafts": {**form.drafts, action.field: action.text}})

    if isinstance(action, CommitDraft):
        return _commit_draft(form, action.field)

    if isinstance(action, SetNotes):
        return form.model_copy(update={"notes": action.value})

    raise TypeError(f"Unsupported form action: {action!r}")


def build_form(
    form_model: type[FormT],
    config: PricingConfig,
    initial: Mapping[str, Any] | None = None,
) -> tuple[FormT, frozenset[str]]:
    """Create a form seeded from ``config``.

    Rates supplied in ``initial["rates"]`` win over the config and are
    returned as the pinned set that later config loads must not overwrite.
    """
    payload = dict(initial or {})
    explicit_rates = dict(payload.pop("rates", None) or {})
    rates_model = type(config.rates)

    pinned: set[str] = set()
    rate_values = config.rates.model_dump()
    for key, value in explicit_rates.items():
        name = rate_field_name(rates_model, key)
        if name is None:
            logger.warning("Ignoring unknown rate field %r for %s", key, config.service_id.value)
            continue
        rate_values[name] = value
        pinned.add(name)

    payload["rates"] = rate_values
    form = form_model.model_validate(payload)
    if form.contract_months is not None:
        form = form.model_copy(update={"contract_months": config.contract_limits.clamp(form.contract_months)})
    return form, frozenset(pinned)


def apply_config(form: FormT, config: PricingConfig, pinned: frozenset[str] = frozenset()) -> FormT:
    """Mirror a freshly loaded config into the form.

    Pinned rates keep the caller's values. Custom overrides are cleared.
    """
    mirrored = {
        name: getattr(config.rates, name)
        for name in config.rates.rate_fields()
        if name not in pinned
    }
    update: dict[str, Any] = {
        "rates": form.rates.model_copy(update=mirrored),
        "overrides": CustomOverrides(),
        INSTALL_OVERRIDE_FIELD: None,
    }
    if form.contract_months is not None:
        update["contract_months"] = config.contract_limits.clamp(form.contract_months)
    return form.model_copy(update=update)

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from schemas.imports import Frequency


class SetQuantity(BaseModel):
    kind: Literal["setQuantity"] = "setQuantity"
    field: str
    value: Any = None


class SetFrequency(BaseModel):
    kind: Literal["setFrequency"] = "setFrequency"
    value: Frequency


class SetContractMonths(BaseModel):
    kind: Literal["setContractMonths"] = "setContractMonths"
    value: Any = None


class SetFlag(BaseModel):
    kind: Literal["setFlag"] = "setFlag"
    field: str
    value: bool


class SetOption(BaseModel):
    kind: Literal["setOption"] = "setOption"
    field: str
    value: str


class SetRate(BaseModel):
    kind: Literal["setRate"] = "setRate"
    field: str
    value: Any = None


class SetOverride(BaseModel):
    kind: Literal["setOverride"] = "setOverride"
    field: str
    value: Any = None


class ClearOverride(BaseModel):
    kind: Literal["clearOverride"] = "clearOverride"
    field: str


class EditDraft(BaseModel):
    kind: Literal["editDraft"] = "editDraft"
    field: str
    text: str


class CommitDraft(BaseModel):
    kind: Literal["commitDraft"] = "commitDraft"
    field: str


class SetNotes(BaseModel):
    kind: Literal["setNotes"] = "setNotes"
    value: str


FormAction = Annotated[
    Union[
        SetQuantity,
        SetFrequency,
        SetContractMonths,
        SetFlag,
        SetOption,
        SetRate,
        SetOverride,
        ClearOverride,
        EditDraft,
        CommitDraft,
        SetNotes,
    ],
    Field(discriminator="kind"),
]

FORM_ACTION_ADAPTER: TypeAdapter[FormAction] = TypeAdapter(FormAction)


def parse_form_action(payload: dict[str, Any]) -> FormAction:
    return FORM_ACTION_ADAPTER.validate_python(payload)

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from cartform.core.fields import CSRF_FIELD, default_input
from cartform.schemas.add_to_cart import AddToCartInput
from cartform.schemas.fields import FieldDescriptor, FieldKind
from cartform.schemas.validation import FieldError

logger = logging.getLogger(__name__)


class BindResult(BaseModel):
    model: AddToCartInput
    # field name -> why the submitted value could not be converted
    conversion_errors: dict[str, FieldError] = Field(default_factory=dict)
    extra_fields: list[str] = Field(default_factory=list)
    # what the user typed, kept so an invalid form re-renders it unchanged
    submitted: dict[str, str | None] = Field(default_factory=dict)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _to_integer(value: Any) -> int:
    # bool is an int subclass; a checkbox-ish true/false is not a quantity
    if isinstance(value, bool):
        raise ValueError("bool is not a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("not a whole number")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f"unsupported type {type(value).__name__}")


def _convert(field: FieldDescriptor, value: Any) -> int | str:
    """
    Raw submitted value -> model value for the field's kind.
    Raises ValueError with FieldError-ready text on failure.
    """
    if field.kind == FieldKind.INTEGER:
        try:
            return _to_integer(value)
        except ValueError:
            raise ValueError("must be a number")

    if field.kind == FieldKind.CHOICE:
        if not isinstance(value, str):
            raise ValueError("must be a string")
        return value.strip()

    raise ValueError(f"Unknown field kind: {field.kind}")


def merge(
    fields: tuple[FieldDescriptor, ...],
    raw: Mapping[str, Any] | None,
) -> BindResult:
    """
    Bind one submission onto a default AddToCartInput.

    Submitted values overwrite the defaults. A field missing from the
    submission, or submitted blank, is cleared to None. Values that can't be
    converted leave the field None and are reported in conversion_errors;
    nothing here raises.
    """
    raw = raw or {}
    model = default_input(fields)
    conversion_errors: dict[str, FieldError] = {}
    submitted: dict[str, str | None] = {}

    known = {f.name for f in fields} | {CSRF_FIELD}
    extra_fields = [k for k in raw.keys() if k not in known]
    if extra_fields:
        logger.debug("Extra submitted fields: %s", extra_fields)

    for field in fields:
        if not field.carries_value:
            continue

        value = raw.get(field.name)
        submitted[field.name] = None if value is None else str(value)
        if _is_blank(value):
            setattr(model, field.name, None)
            continue

        try:
            setattr(model, field.name, _convert(field, value))
        except ValueError as e:
            setattr(model, field.name, None)
            conversion_errors[field.name] = FieldError(code="type", message=str(e))

    return BindResult(
        model=model,
        conversion_errors=conversion_errors,
        extra_fields=extra_fields,
        submitted=submitted,
    )

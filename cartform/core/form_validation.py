from __future__ import annotations

from typing import Any

from cartform.schemas.add_to_cart import AddToCartInput
from cartform.schemas.fields import FieldDescriptor, OneOf, Present, Range, Rule
from cartform.schemas.validation import FieldError, ValidationResult


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _check_rule(rule: Rule, value: Any) -> FieldError | None:
    """
    Evaluate a single rule. Returns the error, or None when satisfied.
    """
    if isinstance(rule, Present):
        if _is_blank(value):
            return FieldError(code="required", message="must not be blank")
        return None

    if isinstance(rule, Range):
        # Present owns the empty case
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not (rule.min <= value <= rule.max):
            return FieldError(code="range", message=f"must be between {rule.min} and {rule.max}")
        return None

    if isinstance(rule, OneOf):
        if value is None:
            return None
        if value not in rule.values:
            return FieldError(code="choice", message=f"must be one of {', '.join(rule.values)}")
        return None

    return FieldError(code="unknown_rule", message=f"Unknown rule: {rule!r}")


def validate_field(field: FieldDescriptor, value: Any) -> list[FieldError]:
    """
    Rules run in declaration order; a failed Present stops the rest.
    """
    errors: list[FieldError] = []
    for rule in field.rules:
        err = _check_rule(rule, value)
        if err is None:
            continue
        errors.append(err)
        if isinstance(rule, Present):
            break
    return errors


def validate(
    model: AddToCartInput,
    fields: tuple[FieldDescriptor, ...],
    conversion_errors: dict[str, FieldError] | None = None,
) -> ValidationResult:
    """
    Evaluate every field's rules against the bound model.

    A field whose submitted value could not be converted reports only the
    conversion error; its rules are not run against the cleared value.
    """
    conversion_errors = conversion_errors or {}
    result = ValidationResult()

    for field in fields:
        if not field.carries_value:
            continue

        if field.name in conversion_errors:
            err = conversion_errors[field.name]
            result.add(field.name, err.code, err.message)
            continue

        for err in validate_field(field, getattr(model, field.name, None)):
            result.add(field.name, err.code, err.message)

    return result

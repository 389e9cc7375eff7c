from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from cartform.core.binding import merge
from cartform.core.cart import CartService
from cartform.core.fields import default_input
from cartform.core.form_validation import validate
from cartform.schemas.add_to_cart import AddToCartInput, CartLine
from cartform.schemas.fields import FieldDescriptor
from cartform.schemas.validation import ValidationResult

logger = logging.getLogger(__name__)

CSRF_ERROR_MESSAGE = "The CSRF token is invalid. Please try to resubmit the form."
EXTRA_FIELDS_MESSAGE = "This form should not contain extra fields."


class FormState(str, Enum):
    INITIAL = "INITIAL"
    BOUND = "BOUND"
    VALID = "VALID"
    INVALID = "INVALID"
    RESPONDED = "RESPONDED"


class FormOutcome(BaseModel):
    state: FormState
    submitted: bool
    model: AddToCartInput
    result: ValidationResult = Field(default_factory=ValidationResult)
    # raw values to show again when the form is re-rendered
    view_values: dict[str, str | None] = Field(default_factory=dict)
    cart_line: CartLine | None = None
    # every state passed through, ending with `state`
    transitions: list[FormState] = Field(default_factory=list)


def normalize_submission(raw: Any) -> Mapping[str, Any]:
    """
    Anything other than a mapping under the form name is treated as an
    empty submission; the per-field rules then report what is missing.
    """
    if isinstance(raw, Mapping):
        return raw
    logger.debug("Malformed submission payload of type %s", type(raw).__name__)
    return {}


def handle_add_to_cart(
    *,
    fields: tuple[FieldDescriptor, ...],
    submission: Any | None,
    csrf_valid: bool,
    cart: CartService,
) -> FormOutcome:
    """
    Run one request through INITIAL -> BOUND -> VALID | INVALID.

    submission is None when the request carries no form data; the defaults
    are then rendered as-is (RESPONDED) without validation.
    Never raises for bad input: every problem ends up in outcome.result.
    """
    transitions = [FormState.INITIAL]

    if submission is None:
        transitions.append(FormState.RESPONDED)
        return FormOutcome(
            state=FormState.RESPONDED,
            submitted=False,
            model=default_input(fields),
            transitions=transitions,
        )

    bound = merge(fields, normalize_submission(submission))
    model = bound.model
    transitions.append(FormState.BOUND)

    result = validate(model, fields, bound.conversion_errors)
    if not csrf_valid:
        result.add_form_error("csrf", CSRF_ERROR_MESSAGE)
    if bound.extra_fields:
        result.add_form_error("extra_fields", EXTRA_FIELDS_MESSAGE)

    if not result.is_valid:
        transitions.append(FormState.INVALID)
        logger.info(
            "Add-to-cart submission invalid: fields=%s form_errors=%s",
            result.messages(),
            [e.code for e in result.form_errors],
        )
        return FormOutcome(
            state=FormState.INVALID,
            submitted=True,
            model=model,
            result=result,
            view_values=bound.submitted,
            transitions=transitions,
        )

    transitions.append(FormState.VALID)
    line = cart.add(model.quantity, model.color)
    logger.debug("Add-to-cart submission valid: %s", model.model_dump())
    return FormOutcome(
        state=FormState.VALID,
        submitted=True,
        model=model,
        result=result,
        view_values=bound.submitted,
        cart_line=line,
        transitions=transitions,
    )

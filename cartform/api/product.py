import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from cartform.core.binding import merge
from cartform.core.cart import CartService, get_cart_service
from cartform.core.config import settings
from cartform.core.csrf import CsrfTokenManager, get_csrf_manager
from cartform.core.fields import CSRF_FIELD, FORM_NAME, build_add_to_cart_fields, default_input, get_field
from cartform.core.form_handler import FormState, handle_add_to_cart, normalize_submission
from cartform.core.form_validation import validate
from cartform.core.form_view import build_form_view
from cartform.core.templating import templates
from cartform.schemas.validation import ValidationPreviewError, ValidationPreviewResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["product"])

# add_to_cart[quantity] -> quantity
_FIELD_NAME_RE = re.compile(rf"^{FORM_NAME}\[([^\]]+)\]$")


async def _read_submission(request: Request) -> Any | None:
    """
    Pull the add_to_cart payload out of a POST body.

    Returns None when the request doesn't submit this form at all.
    JSON that can't be decoded, or a null under the form key, counts as an
    empty submission.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.info("Undecodable JSON body on %s", request.url.path)
            return {}
        if not isinstance(body, Mapping):
            return {}
        if FORM_NAME not in body:
            return None
        value = body[FORM_NAME]
        return {} if value is None else value

    form = await request.form()
    submission: dict[str, Any] = {}
    found = False
    for key in form.keys():
        m = _FIELD_NAME_RE.match(key)
        if m:
            found = True
            # last value wins when a name repeats
            submission[m.group(1)] = form.getlist(key)[-1]
        elif key == FORM_NAME:
            found = True
    return submission if found else None


def _success_message(quantity: int, color: str) -> str:
    color_field = get_field(build_add_to_cart_fields(), "color")
    label = color_field.choice_label(color) if color_field else None
    return f"Added {quantity} × {label or color} to your cart."


@router.api_route("/product", methods=["GET", "POST"], name="product_show")
@router.api_route("/form-symfony", methods=["GET", "POST"], name="form_symfony")
async def product_show(
    request: Request,
    cart: CartService = Depends(get_cart_service),
    csrf: CsrfTokenManager = Depends(get_csrf_manager),
):
    fields = build_add_to_cart_fields()
    cookie_value, cookie_is_new = csrf.cookie_from(request)

    submission = await _read_submission(request) if request.method == "POST" else None

    csrf_valid = True
    if submission is not None:
        token = normalize_submission(submission).get(CSRF_FIELD)
        csrf_valid = csrf.is_valid(FORM_NAME, None if cookie_is_new else cookie_value, token)

    outcome = handle_add_to_cart(
        fields=fields,
        submission=submission,
        csrf_valid=csrf_valid,
        cart=cart,
    )

    flashes: list[dict[str, str]] = []
    csrf_token = csrf.token_for(FORM_NAME, cookie_value)
    if outcome.state == FormState.VALID:
        flashes.append({
            "level": "success",
            "text": _success_message(outcome.model.quantity, outcome.model.color),
        })
        # accepted: start over with an empty form
        form = build_form_view(
            fields=fields,
            model=default_input(fields),
            action=request.url.path,
            csrf_token=csrf_token,
        )
    else:
        form = build_form_view(
            fields=fields,
            model=outcome.model,
            action=request.url.path,
            result=outcome.result,
            view_values=outcome.view_values,
            csrf_token=csrf_token,
        )

    response = templates.TemplateResponse(
        request,
        "product/show.html",
        {
            "app_name": settings.APP_NAME,
            "form": form,
            "flashes": flashes,
            "state": outcome.state.value,
        },
    )
    if cookie_is_new:
        response.set_cookie(csrf.cookie_name, cookie_value, httponly=True, samesite="lax")
    return response


@router.post("/product/validate", response_model=ValidationPreviewResponse)
def validate_product_form(payload: dict[str, Any] = Body(...)):
    """
    Validate an add-to-cart payload without adding anything to the cart.
    Unknown keys are reported as warnings rather than errors.
    """
    fields = build_add_to_cart_fields()
    bound = merge(fields, normalize_submission(payload.get(FORM_NAME)))
    result = validate(bound.model, fields, bound.conversion_errors)

    errors = [
        ValidationPreviewError(field=name, code=e.code, message=e.message)
        for name, errs in result.errors.items()
        for e in errs
    ]
    warnings = [f"Unknown field ignored: {k}" for k in bound.extra_fields]

    return ValidationPreviewResponse(
        valid=result.is_valid,
        values=bound.model.model_dump(),
        errors=errors,
        warnings=warnings,
    )

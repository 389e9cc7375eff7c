from pydantic import BaseModel, Field

from cartform.core.fields import CSRF_FIELD, FORM_NAME
from cartform.schemas.add_to_cart import AddToCartInput
from cartform.schemas.fields import FieldDescriptor, FieldKind
from cartform.schemas.validation import ValidationResult


class FieldView(BaseModel):
    """What the template macros need to draw one row."""
    name: str
    kind: str
    id: str
    full_name: str
    label: str
    value: str = ""
    required: bool = False
    attr: dict[str, str | int] = Field(default_factory=dict)
    choices: list[tuple[str, str]] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class FormView(BaseModel):
    name: str
    action: str
    method: str = "post"
    fields: list[FieldView]
    errors: list[str] = Field(default_factory=list)
    csrf_field_name: str
    csrf_token: str | None = None

    def field(self, name: str) -> FieldView:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)


def _display_value(value) -> str:
    return "" if value is None else str(value)


def build_form_view(
    *,
    fields: tuple[FieldDescriptor, ...],
    model: AddToCartInput,
    action: str,
    result: ValidationResult | None = None,
    view_values: dict[str, str | None] | None = None,
    csrf_token: str | None = None,
) -> FormView:
    """
    Pair the field set with one request's values and errors.

    view_values (what the user typed) win over the model so a rejected
    submission shows its input again, not the cleared model value.
    """
    result = result or ValidationResult()
    view_values = view_values or {}
    messages = result.messages()

    out: list[FieldView] = []
    for f in fields:
        if f.name in view_values:
            value = _display_value(view_values[f.name])
        else:
            value = _display_value(getattr(model, f.name, None))

        out.append(
            FieldView(
                name=f.name,
                kind=f.kind.value,
                id=f"{FORM_NAME}_{f.name}",
                full_name=f"{FORM_NAME}[{f.name}]",
                label=f.label,
                value=value if f.kind != FieldKind.SUBMIT else "",
                required=f.required,
                attr=dict(f.attr),
                choices=list(f.choices),
                errors=messages.get(f.name, []),
            )
        )

    return FormView(
        name=FORM_NAME,
        action=action,
        fields=out,
        errors=[e.message for e in result.form_errors],
        csrf_field_name=f"{FORM_NAME}[{CSRF_FIELD}]",
        csrf_token=csrf_token,
    )

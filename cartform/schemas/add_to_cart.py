from pydantic import BaseModel


class AddToCartInput(BaseModel):
    """
    One request's add-to-cart values. Defaults come from the field
    declarations (see core.fields.default_input).

    Not validated on construction: binding may leave fields empty or out of
    range, and the form validator reports on that afterwards.
    """
    quantity: int | None = None
    color: str | None = None


class CartLine(BaseModel):
    quantity: int
    color: str

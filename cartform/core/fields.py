from functools import lru_cache

from cartform.schemas.add_to_cart import AddToCartInput
from cartform.schemas.fields import FieldDescriptor, FieldKind, OneOf, Present, Range

FORM_NAME = "add_to_cart"
CSRF_FIELD = "_token"

QUANTITY_MIN = 1
QUANTITY_MAX = 10

COLOR_CHOICES: tuple[tuple[str, str], ...] = (
    ("Matte Black", "black"),
    ("Pearl White", "white"),
    ("Silver", "silver"),
)


@lru_cache(maxsize=1)
def build_add_to_cart_fields() -> tuple[FieldDescriptor, ...]:
    """
    Ordered field set of the add-to-cart form.
    Built once; every caller shares the same immutable tuple.
    """
    return (
        FieldDescriptor(
            name="quantity",
            kind=FieldKind.INTEGER,
            label="Quantity",
            default=1,
            attr={
                "class": "form-control",
                "min": QUANTITY_MIN,
                "max": QUANTITY_MAX,
                "style": "max-width: 100px;",
            },
            rules=(Present(), Range(min=QUANTITY_MIN, max=QUANTITY_MAX)),
        ),
        FieldDescriptor(
            name="color",
            kind=FieldKind.CHOICE,
            label="Select Color",
            attr={
                "class": "form-select",
                "style": "max-width: 200px;",
            },
            choices=COLOR_CHOICES,
            rules=(Present(), OneOf(values=tuple(v for _, v in COLOR_CHOICES))),
        ),
        FieldDescriptor(
            name="submit",
            kind=FieldKind.SUBMIT,
            label="Add to Cart",
            attr={"class": "btn btn-primary btn-lg"},
        ),
    )


def get_field(fields: tuple[FieldDescriptor, ...], name: str) -> FieldDescriptor | None:
    for f in fields:
        if f.name == name:
            return f
    return None


def default_input(fields: tuple[FieldDescriptor, ...]) -> AddToCartInput:
    """Fresh input model holding each field's declared default."""
    return AddToCartInput(**{f.name: f.default for f in fields if f.carries_value})


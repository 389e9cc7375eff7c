from cartform.core.binding import merge
from cartform.core.fields import build_add_to_cart_fields, get_field
from cartform.core.form_validation import validate, validate_field
from cartform.schemas.add_to_cart import AddToCartInput
from cartform.schemas.validation import FieldError

FIELDS = build_add_to_cart_fields()


def test_valid_model_has_no_errors():
    result = validate(AddToCartInput(quantity=3, color="white"), FIELDS)
    assert result.is_valid
    assert result.messages() == {}


def test_quantity_out_of_range():
    for q in (0, 11, 15, -3):
        result = validate(AddToCartInput(quantity=q, color="black"), FIELDS)
        assert result.messages() == {"quantity": ["must be between 1 and 10"]}
        assert result.errors["quantity"][0].code == "range"


def test_range_bounds_are_inclusive():
    assert validate(AddToCartInput(quantity=1, color="black"), FIELDS).is_valid
    assert validate(AddToCartInput(quantity=10, color="black"), FIELDS).is_valid


def test_color_not_in_choices():
    result = validate(AddToCartInput(quantity=1, color="green"), FIELDS)
    assert result.messages() == {"color": ["must be one of black, white, silver"]}
    assert result.errors["color"][0].code == "choice"


def test_missing_values_only_report_required():
    result = validate(AddToCartInput(quantity=None, color=None), FIELDS)
    assert result.messages() == {
        "quantity": ["must not be blank"],
        "color": ["must not be blank"],
    }


def test_conversion_error_replaces_rule_checks():
    bound = merge(FIELDS, {"quantity": "many", "color": "black"})
    result = validate(bound.model, FIELDS, bound.conversion_errors)
    assert result.messages() == {"quantity": ["must be a number"]}
    assert result.errors["quantity"][0] == FieldError(code="type", message="must be a number")


def test_submit_field_is_never_validated():
    submit = get_field(FIELDS, "submit")
    assert validate_field(submit, None) == []

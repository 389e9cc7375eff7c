from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class FieldKind(str, Enum):
    INTEGER = "integer"
    CHOICE = "choice"
    SUBMIT = "submit"


class Present(BaseModel):
    """Value must be set and not blank."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["present"] = "present"


class Range(BaseModel):
    """Numeric value must lie within [min, max] (inclusive)."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["range"] = "range"
    min: int
    max: int


class OneOf(BaseModel):
    """Value must be one of the enumerated values."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["one_of"] = "one_of"
    values: tuple[str, ...]


Rule = Annotated[Union[Present, Range, OneOf], Field(discriminator="kind")]


class FieldDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, max_length=120)
    kind: FieldKind
    label: str = Field(min_length=1, max_length=200)
    default: int | str | None = None
    # html attributes, rendered verbatim on the widget
    attr: dict[str, str | int] = Field(default_factory=dict)
    # display label -> submitted value, in display order
    choices: tuple[tuple[str, str], ...] = ()
    rules: tuple[Rule, ...] = ()

    @property
    def carries_value(self) -> bool:
        return self.kind != FieldKind.SUBMIT

    @property
    def required(self) -> bool:
        return any(isinstance(r, Present) for r in self.rules)

    def choice_label(self, value: str | None) -> str | None:
        for label, v in self.choices:
            if v == value:
                return label
        return None

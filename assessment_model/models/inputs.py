"""Input items used by simple, multiple-input, and choice questions."""

from typing import Literal

from assessment_model.models.enums import UIHint
from assessment_model.models.wire import WireModel, polymorphic
from assessment_model.registry.types import INPUT_ITEM


class InputItem(WireModel):
    """Base for a single answer field."""

    type: str
    identifier: str | None = None
    field_label: str | None = None
    placeholder: str | None = None
    optional: bool = True
    exclusive: bool = False
    ui_hint: UIHint | None = None


class StringTextInputItem(InputItem):
    """Free-text entry."""

    type: Literal["string"] = "string"
    max_length: int | None = None

    @classmethod
    def examples(cls) -> list["StringTextInputItem"]:
        return [
            cls(),
            cls(field_label="Favorite color", placeholder="blue", max_length=40),
        ]


class IntegerTextInputItem(InputItem):
    """Whole-number entry with optional bounds."""

    type: Literal["integer"] = "integer"
    minimum_value: int | None = None
    maximum_value: int | None = None

    @classmethod
    def examples(cls) -> list["IntegerTextInputItem"]:
        return [cls(field_label="Hours of sleep", minimum_value=0, maximum_value=24)]


class DecimalTextInputItem(InputItem):
    """Decimal entry with optional bounds and precision."""

    type: Literal["decimal"] = "decimal"
    minimum_value: float | None = None
    maximum_value: float | None = None
    maximum_fraction_digits: int | None = None

    @classmethod
    def examples(cls) -> list["DecimalTextInputItem"]:
        return [cls(field_label="Weight (kg)", minimum_value=0.0, maximum_fraction_digits=1)]


class YearTextInputItem(InputItem):
    """Calendar-year entry."""

    type: Literal["year"] = "year"
    allow_future: bool = True
    allow_past: bool = True
    minimum_year: int | None = None
    maximum_year: int | None = None

    @classmethod
    def examples(cls) -> list["YearTextInputItem"]:
        return [cls(field_label="Year of birth", allow_future=False, minimum_year=1900)]


class CheckboxInputItem(InputItem):
    """A single labeled checkbox."""

    type: Literal["checkbox"] = "checkbox"
    field_label: str

    @classmethod
    def examples(cls) -> list["CheckboxInputItem"]:
        return [cls(field_label="Prefer not to answer", exclusive=True)]


InputItemField = polymorphic(InputItem, INPUT_ITEM)

"""Survey questions and the rules that skip past them."""

from typing import Any, Literal

from pydantic import Field, field_validator

from assessment_model.models.base import Step
from assessment_model.models.enums import (
    BaseType,
    ReservedNavigationIdentifier,
    SurveyRuleOperator,
    UIHint,
)
from assessment_model.models.inputs import (
    CheckboxInputItem,
    IntegerTextInputItem,
    InputItemField,
    StringTextInputItem,
    YearTextInputItem,
)
from assessment_model.models.wire import WireModel


class SurveyRule(WireModel):
    """Skip to another node when the collected answer matches.

    Rules on a question are evaluated in declared order; the first match wins.
    Without a target the rule exits the assessment. Exit targets compare
    case-insensitively, so "exit" and "Exit" from other platforms agree.
    A null operator on the wire means equality.
    """

    matching_answer: Any = None
    rule_operator: SurveyRuleOperator | None = SurveyRuleOperator.EQUAL
    skip_to_identifier: str = ReservedNavigationIdentifier.EXIT.value

    @field_validator("rule_operator", mode="before")
    @classmethod
    def default_operator(cls, value: Any) -> Any:
        return SurveyRuleOperator.EQUAL if value is None else value

    def matches(self, answer: Any) -> bool:
        """Whether a collected answer triggers this rule."""
        operator = self.rule_operator
        if operator is SurveyRuleOperator.ALWAYS:
            return True
        if operator is SurveyRuleOperator.SKIP:
            return answer is None
        if answer is None:
            return False
        if operator is SurveyRuleOperator.EQUAL:
            return answer == self.matching_answer
        if operator is SurveyRuleOperator.NOT_EQUAL:
            return answer != self.matching_answer
        try:
            if operator is SurveyRuleOperator.LESS_THAN:
                return answer < self.matching_answer
            if operator is SurveyRuleOperator.GREATER_THAN:
                return answer > self.matching_answer
            if operator is SurveyRuleOperator.LESS_THAN_EQUAL:
                return answer <= self.matching_answer
            if operator is SurveyRuleOperator.GREATER_THAN_EQUAL:
                return answer >= self.matching_answer
        except TypeError:
            return False
        return False


class ChoiceOption(WireModel):
    """One selectable answer of a choice question."""

    value: Any = None
    text: str | None = None
    detail: str | None = None
    icon: str | None = None
    exclusive: bool = False


class Question(Step):
    """A step that collects an answer."""

    optional: bool = False
    survey_rules: list[SurveyRule] | None = []

    @field_validator("survey_rules", mode="before")
    @classmethod
    def default_rules(cls, value: Any) -> Any:
        return [] if value is None else value


class SimpleQuestion(Question):
    """A question with a single input field."""

    type: Literal["simpleQuestion"] = "simpleQuestion"
    input_item: InputItemField
    ui_hint: UIHint | None = None

    @classmethod
    def examples(cls) -> list["SimpleQuestion"]:
        return [
            cls(identifier="simpleQuestion", input_item=StringTextInputItem()),
            cls(
                identifier="age",
                title="How old are you?",
                input_item=IntegerTextInputItem(field_label="Age", minimum_value=18),
                survey_rules=[
                    SurveyRule(matching_answer=18, rule_operator=SurveyRuleOperator.LESS_THAN),
                ],
            ),
        ]


class MultipleInputQuestion(Question):
    """A question with several input fields on one screen."""

    type: Literal["multipleInputQuestion"] = "multipleInputQuestion"
    input_items: list[InputItemField]
    ui_hint: UIHint | None = None

    @classmethod
    def examples(cls) -> list["MultipleInputQuestion"]:
        return [
            cls(
                identifier="birth",
                title="Where and when were you born?",
                input_items=[
                    StringTextInputItem(identifier="city", field_label="City"),
                    YearTextInputItem(identifier="year", allow_future=False),
                    CheckboxInputItem(identifier="skip", field_label="Prefer not to say", exclusive=True),
                ],
                optional=True,
            )
        ]


class ChoiceQuestion(Question):
    """A question answered by picking from a list of choices."""

    type: Literal["choiceQuestion"] = "choiceQuestion"
    choices: list[ChoiceOption]
    base_type: BaseType = BaseType.STRING
    single_answer: bool = Field(default=True, alias="singleChoice")
    ui_hint: UIHint | None = None
    other: InputItemField | None = None

    @classmethod
    def examples(cls) -> list["ChoiceQuestion"]:
        return [
            cls(
                identifier="choice",
                title="Do you like cats?",
                choices=[
                    ChoiceOption(value=True, text="Yes"),
                    ChoiceOption(value=False, text="No"),
                ],
                base_type=BaseType.BOOLEAN,
                survey_rules=[SurveyRule(matching_answer=False, skip_to_identifier="dogs")],
            ),
            cls(
                identifier="favoriteFood",
                choices=[
                    ChoiceOption(value="pizza", text="Pizza"),
                    ChoiceOption(value="tacos", text="Tacos"),
                ],
                single_answer=False,
                ui_hint=UIHint.CHECKBOX,
                other=StringTextInputItem(field_label="Something else"),
            ),
        ]

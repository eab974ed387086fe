"""Timed steps driven by behavior commands."""

from typing import Annotated, Any, Literal

from pydantic import (
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    WithJsonSchema,
    field_serializer,
    field_validator,
    model_serializer,
)

from assessment_model.models.base import Step
from assessment_model.models.enums import ActiveStepCommand, SpokenInstructionTiming

COUNTDOWN_COMMANDS = frozenset(
    {ActiveStepCommand.START_TIMER_AUTOMATICALLY, ActiveStepCommand.CONTINUE_ON_FINISH}
)

# Any token list decodes; shorthand and unknown tokens are handled by parse_commands.
CommandSet = Annotated[
    frozenset[ActiveStepCommand],
    WithJsonSchema({"type": ["array", "null"], "items": {"type": "string"}}),
]


class BaseActiveStep(Step):
    """A timed step.

    Commands are written on the wire as a sorted list of lower-camel-case
    tokens and held in memory as a frozenset of ActiveStepCommand.
    """

    duration: float = Field(ge=0)
    requires_background_audio: bool = False
    should_end_on_interrupt: bool = False
    commands: CommandSet = frozenset()

    @field_validator("commands", mode="before")
    @classmethod
    def parse_commands(cls, value: Any) -> frozenset[ActiveStepCommand]:
        """Convert wire tokens to a command set."""
        if value is None:
            return frozenset()
        if isinstance(value, str) or not hasattr(value, "__iter__"):
            raise ValueError("commands must be a list of command tokens")
        tokens = list(value)
        if not all(isinstance(token, str) for token in tokens):
            raise ValueError("commands must be strings")
        return ActiveStepCommand.from_strings(tokens)

    @field_serializer("commands")
    def serialize_commands(self, commands: frozenset[ActiveStepCommand]) -> list[str]:
        return ActiveStepCommand.to_strings(commands)

    @model_serializer(mode="wrap")
    def omit_default_commands(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        if info.exclude_defaults and self.commands == type(self).model_fields["commands"].default:
            data.pop("commands", None)
        return data


class ActiveStep(BaseActiveStep):
    """A timed step with a configurable duration in seconds."""

    type: Literal["active"] = "active"

    @classmethod
    def examples(cls) -> list["ActiveStep"]:
        return [
            cls(identifier="walk", duration=30.0),
            cls(
                identifier="walk",
                duration=30.0,
                title="Walk",
                requires_background_audio=True,
                commands=frozenset(
                    {ActiveStepCommand.PLAY_SOUND_ON_START, ActiveStepCommand.VIBRATE_ON_FINISH}
                ),
                spoken_instructions={
                    SpokenInstructionTiming.START: "Start walking.",
                    SpokenInstructionTiming.END: "Stop walking.",
                },
            ),
        ]


class CountdownStep(BaseActiveStep):
    """A countdown before a timed step.

    The timer always starts automatically and the step always continues
    when it finishes; configured commands are unioned with those two.
    """

    type: Literal["countdown"] = "countdown"
    duration: float = Field(default=5.0, ge=0)
    full_instructions_only: bool = False
    commands: CommandSet = COUNTDOWN_COMMANDS

    @field_validator("commands", mode="after")
    @classmethod
    def include_countdown_commands(
        cls, value: frozenset[ActiveStepCommand]
    ) -> frozenset[ActiveStepCommand]:
        return value | COUNTDOWN_COMMANDS

    @classmethod
    def examples(cls) -> list["CountdownStep"]:
        return [
            cls(identifier="countdown"),
            cls(
                identifier="countdown",
                duration=3.0,
                title="Get ready",
                commands=frozenset({ActiveStepCommand.PLAY_SOUND_ON_FINISH}),
            ),
        ]

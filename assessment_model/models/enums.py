"""Enumerations shared across the node schema."""

import logging
from collections.abc import Iterable
from enum import Enum

logger = logging.getLogger(__name__)


class ButtonAction(str, Enum):
    """Recognized button-action slots of a step screen."""

    GO_FORWARD = "goForward"
    GO_BACKWARD = "goBackward"
    SKIP = "skip"
    CANCEL = "cancel"
    LEARN_MORE = "learnMore"
    REVIEW_INSTRUCTIONS = "reviewInstructions"
    NAVIGATION = "navigation"


class SpokenInstructionTiming(str, Enum):
    """Phase of an active step at which spoken text is read aloud."""

    START = "start"
    HALFWAY = "halfway"
    COUNTDOWN = "countdown"
    END = "end"


class PermissionType(str, Enum):
    """Device permission requested by a permission step."""

    CAMERA = "camera"
    LOCATION = "location"
    LOCATION_WHEN_IN_USE = "locationWhenInUse"
    MICROPHONE = "microphone"
    MOTION = "motion"
    NOTIFICATIONS = "notifications"
    PHOTO_LIBRARY = "photoLibrary"


class BaseType(str, Enum):
    """Primitive type of a choice question's answer."""

    BOOLEAN = "boolean"
    DECIMAL = "decimal"
    INTEGER = "integer"
    STRING = "string"


class UIHint(str, Enum):
    """Preferred control for rendering a question or input item."""

    CHECKBOX = "checkbox"
    COMBOBOX = "combobox"
    LIST = "list"
    MULTIPLE_LINE = "multipleLine"
    PICKER = "picker"
    POPOVER = "popover"
    RADIO_BUTTON = "radioButton"
    SLIDER = "slider"
    TEXTFIELD = "textfield"
    TOGGLE = "toggle"


class SurveyRuleOperator(str, Enum):
    """Comparison used by a survey rule."""

    EQUAL = "eq"
    NOT_EQUAL = "ne"
    LESS_THAN = "lt"
    GREATER_THAN = "gt"
    LESS_THAN_EQUAL = "le"
    GREATER_THAN_EQUAL = "ge"
    ALWAYS = "always"
    SKIP = "de"


class ActiveStepCommand(str, Enum):
    """Behavior flags of an active step. Values are the wire tokens."""

    PLAY_SOUND_ON_START = "playSoundOnStart"
    PLAY_SOUND_ON_FINISH = "playSoundOnFinish"
    VIBRATE_ON_START = "vibrateOnStart"
    VIBRATE_ON_FINISH = "vibrateOnFinish"
    TRANSITION_AUTOMATICALLY = "transitionAutomatically"
    START_TIMER_AUTOMATICALLY = "startTimerAutomatically"
    SHOULD_DISABLE_IDLE_TIMER = "shouldDisableIdleTimer"
    SPEAK_WARNING_ON_PAUSE = "speakWarningOnPause"
    CONTINUE_ON_FINISH = "continueOnFinish"

    @classmethod
    def from_strings(cls, tokens: Iterable[str]) -> frozenset["ActiveStepCommand"]:
        """Convert wire tokens to a command set.

        Shorthand tokens expand to the start and finish pair. Unknown tokens
        are dropped with a warning.
        """
        commands: set[ActiveStepCommand] = set()
        for token in tokens:
            if token in _SHORTHAND:
                commands.update(_SHORTHAND[token])
                continue
            try:
                commands.add(cls(token))
            except ValueError:
                logger.warning(f"Ignoring unrecognized active step command: {token!r}")
        return frozenset(commands)

    @staticmethod
    def to_strings(commands: Iterable["ActiveStepCommand"]) -> list[str]:
        """Convert a command set to sorted wire tokens."""
        return sorted(command.value for command in commands)


_SHORTHAND: dict[str, tuple[ActiveStepCommand, ...]] = {
    "playSound": (ActiveStepCommand.PLAY_SOUND_ON_START, ActiveStepCommand.PLAY_SOUND_ON_FINISH),
    "vibrate": (ActiveStepCommand.VIBRATE_ON_START, ActiveStepCommand.VIBRATE_ON_FINISH),
}


class ReservedNavigationIdentifier(str, Enum):
    """Skip targets with a special meaning to the navigator."""

    EXIT = "exit"
    NEXT_SECTION = "nextSection"
    BEGINNING = "beginning"

    def matches(self, identifier: str | None) -> bool:
        """Case-insensitive comparison with a skip-to identifier."""
        return identifier is not None and identifier.lower() == self.value.lower()

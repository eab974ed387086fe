"""Custom titles and icons for the button-action slots of a screen."""

from typing import Literal

from assessment_model.models.wire import WireModel, polymorphic
from assessment_model.registry.types import BUTTON_ACTION_INFO


class ButtonActionInfo(WireModel):
    """Base for button customizations.

    Either the title or the icon is displayed. When both are set the title
    wins; when neither is set the platform default is shown.
    """

    type: str
    button_title: str | None = None
    icon_name: str | None = None
    bundle_identifier: str | None = None
    package_name: str | None = None

    @property
    def display_payload(self) -> str | None:
        """The title or icon name to display on the button."""
        return self.button_title if self.button_title is not None else self.icon_name


class DefaultButtonActionInfo(ButtonActionInfo):
    """A button with a custom title or icon."""

    type: Literal["default"] = "default"

    @classmethod
    def examples(cls) -> list["DefaultButtonActionInfo"]:
        return [
            cls(button_title="Go, Dogs! Go"),
            cls(icon_name="closeX", bundle_identifier="org.example.SharedResources"),
        ]


class NavigationButtonActionInfo(ButtonActionInfo):
    """A button that jumps to another node when tapped."""

    type: Literal["navigation"] = "navigation"
    skip_to_identifier: str

    @classmethod
    def examples(cls) -> list["NavigationButtonActionInfo"]:
        return [cls(button_title="Review instructions", skip_to_identifier="instructions")]


ButtonActionField = polymorphic(ButtonActionInfo, BUTTON_ACTION_INFO)

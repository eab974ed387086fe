"""Base classes of the node hierarchy.

Node
  ContentNode        presentation fields and button customization
    Step             spoken instructions, legacy view theme, image
    NodeContainer    ordered children, progress markers, icon
  PlaceholderNode    stand-ins replaced during unpack (see placeholders.py)

Merging one node onto another is not a method of these classes; see
assessment_model.unpack for the field classification that drives it.
"""

from typing import Annotated, Any

from pydantic import (
    Field,
    PlainSerializer,
    PlainValidator,
    ValidationInfo,
    WithJsonSchema,
)

from assessment_model.models.buttons import ButtonActionField
from assessment_model.models.enums import ButtonAction, SpokenInstructionTiming
from assessment_model.models.images import FetchableImage, ImageField, ImageInfo
from assessment_model.models.wire import POLYMORPHIC_JSON_SCHEMA, WireModel
from assessment_model.serialization.codec import DecodeContext, encode


class Node(WireModel):
    """Any element of an assessment tree."""

    type: str
    identifier: str


class ContentNode(Node):
    """A node with presentation text and button customizations."""

    comment: str | None = None
    title: str | None = None
    subtitle: str | None = None
    detail: str | None = None
    footnote: str | None = None
    hide_buttons: list[ButtonAction] = Field(default=[], alias="shouldHideActions")
    button_map: dict[ButtonAction, ButtonActionField] = Field(default={}, alias="actions")
    next_node_identifier: str | None = Field(default=None, alias="nextStepIdentifier")
    web_config: Any = None


class ViewTheme(WireModel):
    """Deprecated view theme, kept so older payloads still decode."""

    view_identifier: str | None = None
    storyboard_identifier: str | None = None
    bundle_identifier: str | None = None


class Step(ContentNode):
    """A single screen of an assessment."""

    spoken_instructions: dict[SpokenInstructionTiming, str] | None = None
    view_theme: ViewTheme | None = None
    image_info: ImageField | None = Field(default=None, alias="image")


def _validate_icon(value: Any, info: ValidationInfo) -> Any:
    if isinstance(value, ImageInfo):
        return value
    if isinstance(value, str):
        return FetchableImage(image_name=value)
    return DecodeContext.from_info(info).decode(value, "imageInfo")


def _encode_icon(value: ImageInfo) -> Any:
    # A bare name only when nothing but the name is set.
    if isinstance(value, FetchableImage) and value == FetchableImage(image_name=value.image_name):
        return value.image_name
    return encode(value)


IconField = Annotated[
    ImageInfo,
    PlainValidator(_validate_icon),
    PlainSerializer(_encode_icon),
    WithJsonSchema({"anyOf": [{"type": "string"}, POLYMORPHIC_JSON_SCHEMA]}),
]


def _validate_children(value: Any, info: ValidationInfo) -> list[Node]:
    if not isinstance(value, (list, tuple)):
        raise ValueError("expected a list of nodes")
    return DecodeContext.from_info(info).decode_children(list(value))


def _encode_children(children: list[Node]) -> list[dict[str, Any]]:
    return [encode(child) for child in children]


NodeList = Annotated[
    list[Node],
    PlainValidator(_validate_children),
    PlainSerializer(_encode_children),
    WithJsonSchema({"type": "array", "items": POLYMORPHIC_JSON_SCHEMA}),
]


class NodeContainer(ContentNode):
    """A node whose children are shown in order.

    The icon is written on the wire as a bare image name.
    """

    children: NodeList = Field(alias="steps")
    progress_markers: list[str] | None = None
    image_info: IconField | None = Field(default=None, alias="icon")

    def child(self, identifier: str) -> Node | None:
        """Get a direct child by its identifier."""
        for node in self.children:
            if node.identifier == identifier:
                return node
        return None

    @property
    def child_identifiers(self) -> list[str]:
        """Identifiers of the direct children in screen order."""
        return [node.identifier for node in self.children]

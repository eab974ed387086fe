"""Field classification for the unpack merge.

Presentation fields are copied from a locally registered original onto the
resolved node. Everything else is structural and comes from the transform.
Navigation annotations (next node, survey rules, active-step commands) are
structural: a local original never redirects the flow of a shared resource.
"""

from enum import Enum

from assessment_model.models import Node, NodeContainer, PlaceholderNode


class FieldClass(str, Enum):
    """How unpack treats a field."""

    PRESENTATION = "presentation"  # Copied from the original
    STRUCTURAL = "structural"  # Taken from the transform
    IDENTITY = "identity"  # Override > original > transform


FIELD_CLASSIFICATION: dict[str, FieldClass] = {
    "identifier": FieldClass.IDENTITY,
    # Text
    "comment": FieldClass.PRESENTATION,
    "title": FieldClass.PRESENTATION,
    "subtitle": FieldClass.PRESENTATION,
    "detail": FieldClass.PRESENTATION,
    "footnote": FieldClass.PRESENTATION,
    # Buttons
    "hide_buttons": FieldClass.PRESENTATION,
    "button_map": FieldClass.PRESENTATION,
    # Step presentation
    "spoken_instructions": FieldClass.PRESENTATION,
    "view_theme": FieldClass.PRESENTATION,
    "image_info": FieldClass.PRESENTATION,
    "progress_markers": FieldClass.PRESENTATION,
    "requires_background_audio": FieldClass.PRESENTATION,
    "should_end_on_interrupt": FieldClass.PRESENTATION,
    # Navigation annotations
    "next_node_identifier": FieldClass.STRUCTURAL,
    "survey_rules": FieldClass.STRUCTURAL,
    "commands": FieldClass.STRUCTURAL,
    # Structure and metadata
    "children": FieldClass.STRUCTURAL,
    "web_config": FieldClass.STRUCTURAL,
    "async_actions": FieldClass.STRUCTURAL,
    "version_string": FieldClass.STRUCTURAL,
    "schema_identifier": FieldClass.STRUCTURAL,
    "schema_url": FieldClass.STRUCTURAL,
    "guid": FieldClass.STRUCTURAL,
    "estimated_minutes": FieldClass.STRUCTURAL,
    "copyright": FieldClass.STRUCTURAL,
    "interruption_handling": FieldClass.STRUCTURAL,
}

PRESENTATION_FIELDS = frozenset(
    name for name, kind in FIELD_CLASSIFICATION.items() if kind is FieldClass.PRESENTATION
)


def classify(field_name: str) -> FieldClass:
    """Classify a model field. Unlisted fields are structural."""
    return FIELD_CLASSIFICATION.get(field_name, FieldClass.STRUCTURAL)


class NodeFamily(str, Enum):
    """Families that may be merged with each other."""

    CONTAINER = "container"
    STEP = "step"
    PLACEHOLDER = "placeholder"


def node_family(node: Node) -> NodeFamily:
    """Return the merge family of a node."""
    if isinstance(node, NodeContainer):
        return NodeFamily.CONTAINER
    if isinstance(node, PlaceholderNode):
        return NodeFamily.PLACEHOLDER
    return NodeFamily.STEP

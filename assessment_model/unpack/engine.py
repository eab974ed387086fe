"""Unpack/merge engine.

Resolves a freshly decoded transform tree against a locally registered
original, replacing placeholders with fetched resources along the way.
Unpack never mutates its inputs: every visited node is rebuilt, so the same
original can be instantiated into several trees.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from assessment_model.diagnostics.collector import LoadReport
from assessment_model.errors import (
    AssessmentModelError,
    ResourceNotFoundError,
    SchemaViolationError,
    UnknownVariantError,
    UnpackTypeMismatchError,
)
from assessment_model.models import (
    Assessment,
    AssessmentInfo,
    AssessmentPlaceholder,
    Node,
    NodeContainer,
    PlaceholderNode,
    TransformableAssessment,
)
from assessment_model.registry.types import TypeRegistry
from assessment_model.resources.provider import ResourceProvider
from assessment_model.resources.registry import AssessmentRegistryProvider, NodeDecoder
from assessment_model.serialization.codec import DecodePolicy, loads_node
from assessment_model.unpack.fields import PRESENTATION_FIELDS, node_family

logger = logging.getLogger(__name__)


class UnpackContext(BaseModel):
    """Collaborators and options for an unpack call."""

    resources: ResourceProvider | None = None
    registry_provider: AssessmentRegistryProvider | None = None
    type_registry: TypeRegistry | None = None
    policy: DecodePolicy = DecodePolicy.STRICT
    match_children: bool = False
    report: LoadReport | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def registered_original(self, identifier: str) -> Node | None:
        """Look up a locally registered original."""
        if self.registry_provider is None:
            return None
        return self.registry_provider.registered_original(identifier)

    def decoder_for(self, placeholder: PlaceholderNode) -> NodeDecoder:
        """Pick the host-supplied decoder for a placeholder, or the default codec."""
        info: AssessmentInfo | None = None
        if isinstance(placeholder, AssessmentPlaceholder):
            info = placeholder.assessment_info
        elif isinstance(placeholder, TransformableAssessment):
            info = placeholder.to_assessment_info()

        if info is not None and self.registry_provider is not None:
            custom = self.registry_provider.registered_decoder(info)
            if custom is not None:
                return custom

        def default_decoder(data: bytes) -> Node:
            return loads_node(data, self.type_registry, self.policy, self.report)

        return default_decoder


def _detach(value: Any) -> Any:
    """Copy mutable containers so the result shares no list or dict with its inputs."""
    if isinstance(value, list):
        return [_detach(item) for item in value]
    if isinstance(value, dict):
        return {key: _detach(item) for key, item in value.items()}
    return value


def _check_family(transform: Node, original: Node) -> None:
    if node_family(transform) is not node_family(original):
        raise UnpackTypeMismatchError(transform.type, original.type, transform.identifier)


def _fetch(placeholder: PlaceholderNode, context: UnpackContext) -> Node:
    name, version = placeholder.locator()
    if context.resources is None:
        raise ResourceNotFoundError(name, version)
    data = context.resources.fetch_resource(name, version)
    logger.debug(f"Decoding resource {name}@{version or 'latest'} for {placeholder.identifier}")
    try:
        return context.decoder_for(placeholder)(data)
    except AssessmentModelError as e:
        e.add_parent(placeholder.identifier)
        raise


def _unpack_placeholder(
    placeholder: PlaceholderNode,
    original: Node | None,
    context: UnpackContext,
    identifier: str | None,
    resolving: frozenset[str],
) -> Node:
    name, version = placeholder.locator()
    key = f"{name}@{version}"
    if key in resolving:
        raise SchemaViolationError(
            "resourceName",
            placeholder.type,
            f"resource {name!r} refers back to itself",
            placeholder.identifier,
        )

    node = _fetch(placeholder, context)
    if isinstance(placeholder, (AssessmentPlaceholder, TransformableAssessment)) and not isinstance(
        node, (Assessment, PlaceholderNode)
    ):
        raise UnpackTypeMismatchError(node.type, Assessment.model_fields["type"].default, placeholder.identifier)

    if original is None:
        original = context.registered_original(placeholder.identifier)
    if identifier is None:
        identifier = placeholder.identifier
    return _unpack(node, original, context, identifier, resolving | {key})


def _unpack_child(child: Node, original: Node | None, context: UnpackContext, resolving: frozenset[str]) -> Node:
    if not isinstance(child, PlaceholderNode) or context.policy is DecodePolicy.STRICT:
        return _unpack(child, original, context, None, resolving)
    try:
        return _unpack(child, original, context, None, resolving)
    except (ResourceNotFoundError, UnknownVariantError, SchemaViolationError) as e:
        if context.report is not None:
            context.report.record_skipped(e, "fetch")
        else:
            logger.warning(f"Keeping unresolved placeholder {child.identifier}: {e}")
        return child.model_copy()


def _unpack(
    transform: Node,
    original: Node | None,
    context: UnpackContext,
    identifier: str | None,
    resolving: frozenset[str],
) -> Node:
    if isinstance(transform, PlaceholderNode):
        return _unpack_placeholder(transform, original, context, identifier, resolving)

    if original is not None:
        _check_family(transform, original)

    if identifier is not None:
        resolved_identifier = identifier
    elif original is not None:
        resolved_identifier = original.identifier
    else:
        resolved_identifier = transform.identifier

    values = {name: _detach(getattr(transform, name)) for name in type(transform).model_fields}
    values["identifier"] = resolved_identifier

    if original is not None:
        original_fields = type(original).model_fields
        for name in PRESENTATION_FIELDS:
            if name in values and name in original_fields:
                values[name] = _detach(getattr(original, name))

    if isinstance(transform, NodeContainer):
        children = []
        for child in transform.children:
            child_original = None
            if context.match_children and isinstance(original, NodeContainer):
                child_original = original.child(child.identifier)
            try:
                children.append(_unpack_child(child, child_original, context, resolving))
            except AssessmentModelError as e:
                e.add_parent(resolved_identifier)
                raise
        values["children"] = children

    return type(transform)(**values)


def unpack(
    transform: Node,
    original: Node | None = None,
    context: UnpackContext | None = None,
    identifier: str | None = None,
) -> Node:
    """Resolve a transform node against an optional original.

    Args:
        transform: The node decoded from the shared resource.
        original: Locally registered node whose presentation fields win.
        context: Collaborators and options. Defaults to no resources and
            strict policy.
        identifier: Caller-supplied identifier for the resolved node.

    Returns:
        A new node. Neither input is modified.

    Raises:
        UnpackTypeMismatchError: If original and transform are different families.
        ResourceNotFoundError: If a placeholder's resource cannot be fetched.
        UnknownVariantError: If a fetched resource has an unknown discriminator.
        SchemaViolationError: If a fetched resource is malformed.
    """
    return _unpack(transform, original, context or UnpackContext(), identifier, frozenset())


def resolve_assessment(root: Node, context: UnpackContext | None = None) -> Assessment:
    """Unpack the root of a tree and require it to be an Assessment.

    The root's registered original, if any, is looked up by its identifier.

    Raises:
        UnpackTypeMismatchError: If the resolved root is not an Assessment.
    """
    context = context or UnpackContext()
    original = None if isinstance(root, PlaceholderNode) else context.registered_original(root.identifier)
    resolved = unpack(root, original, context)
    if not isinstance(resolved, Assessment):
        raise UnpackTypeMismatchError(resolved.type, "assessment", resolved.identifier)
    return resolved

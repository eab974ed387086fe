"""JSON codec for polymorphic models.

Decoding reads the "type" discriminator, resolves it in a TypeRegistry, and
validates the payload with the registered pydantic model. Pydantic
ValidationErrors are translated into SchemaViolationError so they never
escape the codec.

Encoding writes wire aliases, puts the discriminator first, and omits any
field whose value equals its documented default.
"""

import json
import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError, ValidationInfo

from assessment_model.diagnostics.collector import LoadReport
from assessment_model.errors import (
    AssessmentModelError,
    SchemaViolationError,
    UnknownVariantError,
)
from assessment_model.registry.types import NODE, TypeRegistry

logger = logging.getLogger(__name__)

CONTEXT_KEY = "assessment_model"
DISCRIMINATOR = "type"


class DecodePolicy(str, Enum):
    """How a container handles a child that fails to decode."""

    STRICT = "strict"  # Propagate the error and abort the load
    SKIP_INVALID_CHILDREN = "skip"  # Drop the child and record it in the report


class DecodeContext:
    """State threaded through one decode call via pydantic's validation context."""

    def __init__(
        self,
        registry: TypeRegistry | None = None,
        policy: DecodePolicy = DecodePolicy.STRICT,
        report: LoadReport | None = None,
    ) -> None:
        self._registry = registry
        self.policy = DecodePolicy(policy)
        self.report = report

    @property
    def registry(self) -> TypeRegistry:
        """The registry to resolve discriminators in; the default one if unset."""
        if self._registry is None:
            from assessment_model.factory import get_default_registry

            self._registry = get_default_registry()
        return self._registry

    @classmethod
    def from_info(cls, info: ValidationInfo | None) -> "DecodeContext":
        """Recover the context from a validator's info, or build a default one."""
        context = info.context if info is not None else None
        if isinstance(context, dict) and isinstance(context.get(CONTEXT_KEY), DecodeContext):
            return context[CONTEXT_KEY]
        return cls()

    def decode(self, data: Any, family: str = NODE) -> Any:
        """Decode one polymorphic payload.

        Raises:
            UnknownVariantError: If the discriminator is not registered.
            SchemaViolationError: If the payload is malformed.
        """
        if not isinstance(data, dict):
            raise SchemaViolationError(
                "<root>", None, f"expected a JSON object, got {type(data).__name__}"
            )
        identifier = data.get("identifier")
        if not isinstance(identifier, str):
            identifier = None

        type_name = data.get(DISCRIMINATOR)
        if type_name is None:
            raise SchemaViolationError(DISCRIMINATOR, None, "missing discriminator", identifier)
        if not isinstance(type_name, str):
            raise SchemaViolationError(
                DISCRIMINATOR, None, "discriminator must be a string", identifier
            )

        try:
            descriptor = self.registry.resolve(type_name, family)
        except UnknownVariantError as e:
            e.identifier = identifier
            raise

        try:
            model = descriptor.model.model_validate(data, context={CONTEXT_KEY: self})
        except ValidationError as e:
            raise _schema_violation(e, type_name, identifier) from e
        except AssessmentModelError as e:
            e.add_parent(identifier)
            raise

        if family == NODE and self.report is not None:
            self.report.record_node()
        return model

    def decode_children(self, items: list[Any]) -> list[Any]:
        """Decode a container's children, applying the decode policy."""
        children = []
        for item in items:
            if isinstance(item, BaseModel):
                children.append(item)
                continue
            try:
                children.append(self.decode(item, NODE))
            except (UnknownVariantError, SchemaViolationError) as e:
                if self.policy is DecodePolicy.STRICT:
                    raise
                if self.report is not None:
                    self.report.record_skipped(e)
                else:
                    logger.warning(f"Skipping child that failed to decode: {e}")
        return children


def _schema_violation(
    error: ValidationError, variant: str, identifier: str | None
) -> SchemaViolationError:
    """Translate the first pydantic error into a SchemaViolationError."""
    details = error.errors()
    if not details:
        return SchemaViolationError("<root>", variant, str(error), identifier)
    first = details[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    if first.get("type") == "missing":
        message = "required field is missing"
    else:
        message = first.get("msg", "invalid value")
    return SchemaViolationError(field, variant, message, identifier)


def decode(
    data: Any,
    family: str = NODE,
    registry: TypeRegistry | None = None,
    policy: DecodePolicy = DecodePolicy.STRICT,
    report: LoadReport | None = None,
) -> Any:
    """Decode a JSON object of any registered family.

    Args:
        data: Parsed JSON object.
        family: Variant family to resolve the discriminator in.
        registry: Type registry to use. Defaults to the process-wide registry.
        policy: How containers treat children that fail to decode.
        report: Optional collector for skipped children.

    Returns:
        The decoded model instance.
    """
    return DecodeContext(registry, policy, report).decode(data, family)


def decode_node(
    data: Any,
    registry: TypeRegistry | None = None,
    policy: DecodePolicy = DecodePolicy.STRICT,
    report: LoadReport | None = None,
) -> Any:
    """Decode a JSON object into a Node."""
    return decode(data, NODE, registry, policy, report)


def encode(model: BaseModel) -> dict[str, Any]:
    """Encode a model to its canonical wire form.

    Fields equal to their default are omitted. The discriminator, if the
    model has one, is always present and always first.
    """
    payload = model.model_dump(mode="json", by_alias=True, exclude_defaults=True)
    type_name = getattr(model, DISCRIMINATOR, None)
    if not isinstance(type_name, str):
        return payload
    payload.pop(DISCRIMINATOR, None)
    return {DISCRIMINATOR: type_name, **payload}


def encode_node(node: BaseModel) -> dict[str, Any]:
    """Encode a Node to its canonical wire form."""
    return encode(node)


def loads_node(
    text: str | bytes,
    registry: TypeRegistry | None = None,
    policy: DecodePolicy = DecodePolicy.STRICT,
    report: LoadReport | None = None,
) -> Any:
    """Parse JSON text and decode it into a Node.

    Raises:
        SchemaViolationError: If the text is not valid JSON.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaViolationError("<json>", None, f"invalid JSON: {e}") from e
    return decode_node(data, registry, policy, report)


def dumps_node(node: BaseModel, indent: int | None = None) -> str:
    """Encode a Node to JSON text."""
    return json.dumps(encode_node(node), indent=indent, ensure_ascii=False)

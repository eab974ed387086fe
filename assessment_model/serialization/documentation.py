"""Schema documentation for every registered variant.

Produces a JSON-serializable description of each family and variant: its
required and optional wire fields, the documented defaults, a JSON schema,
and one encoded example. The output is used for golden files and for
checking parity with the other platform implementations.
"""

from functools import lru_cache
from typing import Any

import jsonschema
from pydantic import BaseModel
from pydantic.fields import FieldInfo
from pydantic_core import to_jsonable_python

from assessment_model.errors import SchemaViolationError
from assessment_model.registry.types import NODE, TypeRegistry, VariantDescriptor
from assessment_model.serialization.codec import DISCRIMINATOR, encode


def _wire_name(name: str, field: FieldInfo) -> str:
    return field.serialization_alias or field.alias or name


def _json_default(field: FieldInfo) -> Any:
    default = field.get_default(call_default_factory=True)
    if isinstance(default, BaseModel):
        return encode(default)
    if isinstance(default, (set, frozenset)):
        return sorted(to_jsonable_python(value) for value in default)
    return to_jsonable_python(default)


@lru_cache(maxsize=None)
def variant_json_schema(model: type[BaseModel]) -> dict[str, Any]:
    """JSON schema for a variant, with the discriminator marked required."""
    schema = model.model_json_schema(by_alias=True)
    required = schema.setdefault("required", [])
    if DISCRIMINATOR in schema.get("properties", {}) and DISCRIMINATOR not in required:
        required.insert(0, DISCRIMINATOR)
    return schema


def describe_variant(descriptor: VariantDescriptor) -> dict[str, Any]:
    """Describe one registered variant."""
    model = descriptor.model
    required = [DISCRIMINATOR]
    optional: dict[str, Any] = {}
    for name, field in model.model_fields.items():
        if name == DISCRIMINATOR:
            continue
        wire = _wire_name(name, field)
        if field.is_required():
            required.append(wire)
        else:
            optional[wire] = _json_default(field)

    doc = (model.__doc__ or "").strip().splitlines()
    examples = descriptor.examples()
    return {
        "type": descriptor.type_name,
        "model": model.__name__,
        "description": doc[0] if doc else None,
        "required": required,
        "optional": optional,
        "jsonSchema": variant_json_schema(model),
        "example": encode(examples[0]) if examples else None,
    }


def build_documentation(registry: TypeRegistry) -> dict[str, Any]:
    """Describe every family and variant in a registry.

    Args:
        registry: The type registry to document.

    Returns:
        A dict keyed by family name, each holding a list of variant descriptions
        sorted by discriminator.
    """
    return {
        family: [describe_variant(descriptor) for descriptor in registry.variants(family)]
        for family in registry.families
    }


def validate_payload(
    payload: dict[str, Any],
    registry: TypeRegistry,
    family: str = NODE,
) -> None:
    """Validate an encoded payload against its variant's JSON schema.

    Raises:
        UnknownVariantError: If the payload's discriminator is not registered.
        SchemaViolationError: If the payload does not satisfy the schema.
    """
    type_name = payload.get(DISCRIMINATOR)
    if not isinstance(type_name, str):
        raise SchemaViolationError(DISCRIMINATOR, None, "missing discriminator")
    descriptor = registry.resolve(type_name, family)
    try:
        jsonschema.validate(payload, variant_json_schema(descriptor.model))
    except jsonschema.ValidationError as e:
        field = ".".join(str(part) for part in e.absolute_path) or "<root>"
        raise SchemaViolationError(
            field, type_name, e.message, payload.get("identifier")
        ) from e

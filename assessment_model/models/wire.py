"""Base model and annotated field types for the JSON wire format.

Python attributes are snake_case; wire names are lower camel case unless a
field declares an explicit alias. Polymorphic fields decode through the
TypeRegistry carried in the validation context rather than through a fixed
union, so a host can register new variants without touching these models.
"""

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    PlainSerializer,
    PlainValidator,
    ValidationInfo,
    WithJsonSchema,
)
from pydantic.alias_generators import to_camel

from assessment_model.serialization.codec import DecodeContext, encode

POLYMORPHIC_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"type": {"type": "string"}},
    "required": ["type"],
}


class WireModel(BaseModel):
    """Immutable model serialized with camelCase wire names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


def polymorphic(base: type[BaseModel], family: str) -> Any:
    """Build an annotated field type that decodes any variant of a family.

    Instances of `base` pass through unchanged; JSON objects are decoded via
    the registry in the validation context.
    """

    def validate(value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, base):
            return value
        return DecodeContext.from_info(info).decode(value, family)

    return Annotated[
        base,
        PlainValidator(validate),
        PlainSerializer(encode),
        WithJsonSchema(POLYMORPHIC_JSON_SCHEMA),
    ]

"""JSON codec and schema documentation for the node model."""

from assessment_model.serialization.codec import (
    DecodeContext,
    DecodePolicy,
    decode,
    decode_node,
    dumps_node,
    encode,
    encode_node,
    loads_node,
)
from assessment_model.serialization.documentation import (
    build_documentation,
    describe_variant,
    validate_payload,
    variant_json_schema,
)

__all__ = [
    "DecodeContext",
    "DecodePolicy",
    "decode",
    "decode_node",
    "dumps_node",
    "encode",
    "encode_node",
    "loads_node",
    "build_documentation",
    "describe_variant",
    "validate_payload",
    "variant_json_schema",
]

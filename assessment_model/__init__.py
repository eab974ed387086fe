"""assessment-model: Node model, codec, and unpack engine for assessments."""

__version__ = "0.1.0"

from assessment_model.errors import (
    AssessmentModelError,
    RegistryFrozenError,
    ResourceNotFoundError,
    SchemaViolationError,
    UnknownVariantError,
    UnpackTypeMismatchError,
)
from assessment_model.factory import (
    create_registry,
    get_default_registry,
    init_registry,
    reset_default_registry,
)
from assessment_model.serialization import (
    DecodePolicy,
    decode,
    decode_node,
    dumps_node,
    encode,
    encode_node,
    loads_node,
)
from assessment_model.unpack import (
    AssessmentLoader,
    LoaderConfig,
    UnpackContext,
    resolve_assessment,
    unpack,
)

__all__ = [
    "__version__",
    "AssessmentModelError",
    "RegistryFrozenError",
    "ResourceNotFoundError",
    "SchemaViolationError",
    "UnknownVariantError",
    "UnpackTypeMismatchError",
    "create_registry",
    "get_default_registry",
    "init_registry",
    "reset_default_registry",
    "DecodePolicy",
    "decode",
    "decode_node",
    "dumps_node",
    "encode",
    "encode_node",
    "loads_node",
    "AssessmentLoader",
    "LoaderConfig",
    "UnpackContext",
    "resolve_assessment",
    "unpack",
]

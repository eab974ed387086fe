"""Unpack engine: resolve placeholders and merge transforms onto originals."""

from assessment_model.unpack.engine import UnpackContext, resolve_assessment, unpack
from assessment_model.unpack.fields import (
    FIELD_CLASSIFICATION,
    PRESENTATION_FIELDS,
    FieldClass,
    NodeFamily,
    classify,
    node_family,
)
from assessment_model.unpack.loader import AssessmentLoader, LoaderConfig, LoadResult

__all__ = [
    "UnpackContext",
    "unpack",
    "resolve_assessment",
    "FIELD_CLASSIFICATION",
    "PRESENTATION_FIELDS",
    "FieldClass",
    "NodeFamily",
    "classify",
    "node_family",
    "AssessmentLoader",
    "LoaderConfig",
    "LoadResult",
]

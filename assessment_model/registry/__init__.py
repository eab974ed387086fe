"""Type registry mapping wire discriminators to model classes."""

from assessment_model.registry.types import (
    BUTTON_ACTION_INFO,
    FAMILIES,
    IMAGE_INFO,
    INPUT_ITEM,
    NODE,
    TypeRegistry,
    VariantDescriptor,
)

__all__ = [
    "TypeRegistry",
    "VariantDescriptor",
    "NODE",
    "BUTTON_ACTION_INFO",
    "INPUT_ITEM",
    "IMAGE_INFO",
    "FAMILIES",
]

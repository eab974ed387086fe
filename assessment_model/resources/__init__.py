"""Collaborator interfaces for fetching resources and registered originals."""

from assessment_model.resources.provider import (
    DirectoryResourceProvider,
    InMemoryResourceProvider,
    ResourceProvider,
)
from assessment_model.resources.registry import (
    AssessmentRegistryProvider,
    InMemoryRegistryProvider,
    NodeDecoder,
)

__all__ = [
    "ResourceProvider",
    "DirectoryResourceProvider",
    "InMemoryResourceProvider",
    "AssessmentRegistryProvider",
    "InMemoryRegistryProvider",
    "NodeDecoder",
]

"""Type registry mapping wire discriminators to model classes.

Variants are grouped into families (nodes, button actions, input items,
image infos). Each family is a closed set of variants that the registry can
enumerate for documentation and golden-file tests.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from assessment_model.errors import RegistryFrozenError, UnknownVariantError

logger = logging.getLogger(__name__)

NODE = "node"
BUTTON_ACTION_INFO = "buttonActionInfo"
INPUT_ITEM = "inputItem"
IMAGE_INFO = "imageInfo"

FAMILIES = (NODE, BUTTON_ACTION_INFO, INPUT_ITEM, IMAGE_INFO)


class VariantDescriptor:
    """A registered variant: its discriminator, model class, and examples."""

    def __init__(
        self,
        family: str,
        type_name: str,
        model: type,
        example_factory: Callable[[], list[Any]] | None = None,
    ) -> None:
        self.family = family
        self.type_name = type_name
        self.model = model
        self.example_factory = example_factory

    def examples(self) -> list[Any]:
        """Return example instances for this variant."""
        if self.example_factory is None:
            return []
        return list(self.example_factory())

    def __repr__(self) -> str:
        return f"VariantDescriptor({self.family}:{self.type_name} -> {self.model.__name__})"


class TypeRegistry:
    """Registry of polymorphic variants keyed by family and discriminator.

    Registration order does not matter. When the same discriminator is
    registered twice in a family, the latest registration wins; this lets
    tests and host applications override a standard variant.

    The registry is populated once and then frozen. Registering after
    freeze() raises RegistryFrozenError.
    """

    def __init__(self) -> None:
        """Initialize an empty, unfrozen registry."""
        self._variants: dict[str, dict[str, VariantDescriptor]] = {
            family: {} for family in FAMILIES
        }
        self._frozen = False
        self._lock = threading.Lock()

    def register(
        self,
        type_name: str,
        model: type,
        example_factory: Callable[[], list[Any]] | None = None,
        family: str = NODE,
    ) -> VariantDescriptor:
        """Register a variant.

        Args:
            type_name: The wire discriminator (value of the "type" field).
            model: The pydantic model class that decodes this variant.
            example_factory: Optional callable returning example instances.
                Defaults to the model's `examples` classmethod if present.
            family: The variant family (defaults to nodes).

        Returns:
            The stored VariantDescriptor.

        Raises:
            RegistryFrozenError: If the registry has been frozen.
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(type_name, family)
            if example_factory is None:
                example_factory = getattr(model, "examples", None)
            descriptor = VariantDescriptor(family, type_name, model, example_factory)
            variants = self._variants.setdefault(family, {})
            if type_name in variants:
                logger.debug(f"Replacing {family} variant {type_name!r} with {model.__name__}")
            variants[type_name] = descriptor
            return descriptor

    def resolve(self, type_name: str, family: str = NODE) -> VariantDescriptor:
        """Look up the variant for a discriminator.

        Raises:
            UnknownVariantError: If no variant is registered for the discriminator.
        """
        descriptor = self._variants.get(family, {}).get(type_name)
        if descriptor is None:
            raise UnknownVariantError(type_name, family)
        return descriptor

    def has_variant(self, type_name: str, family: str = NODE) -> bool:
        """Check whether a discriminator is registered."""
        return type_name in self._variants.get(family, {})

    def variants(self, family: str = NODE) -> list[VariantDescriptor]:
        """List the variants of a family, sorted by discriminator."""
        registered = self._variants.get(family, {})
        return [registered[name] for name in sorted(registered)]

    @property
    def families(self) -> list[str]:
        """List the families with at least one registered variant."""
        return [family for family, variants in self._variants.items() if variants]

    def all_registered_examples(self, family: str | None = None) -> list[Any]:
        """Return every example instance of every registered variant."""
        families = [family] if family else self.families
        examples: list[Any] = []
        for name in families:
            for descriptor in self.variants(name):
                examples.extend(descriptor.examples())
        return examples

    def freeze(self) -> None:
        """Make the registry read-only."""
        with self._lock:
            self._frozen = True

    @property
    def is_frozen(self) -> bool:
        """Whether the registry rejects further registrations."""
        return self._frozen

"""Factory functions for the type registry.

The process-wide registry is built once by init_registry() and is read-only
afterwards. Tests and host applications that need extra or replacement
variants build their own registry with create_registry().
"""

import logging
import threading
from collections.abc import Callable

from assessment_model.models import (
    ActiveStep,
    AnimatedImage,
    Assessment,
    AssessmentPlaceholder,
    CheckboxInputItem,
    ChoiceQuestion,
    CompletionStep,
    CountdownStep,
    DecimalTextInputItem,
    DefaultButtonActionInfo,
    FetchableImage,
    InstructionStep,
    IntegerTextInputItem,
    MultipleInputQuestion,
    NavigationButtonActionInfo,
    OverviewStep,
    PermissionStep,
    ResultSummaryStep,
    Section,
    SimpleQuestion,
    StringTextInputItem,
    TransformableAssessment,
    TransformableNode,
    YearTextInputItem,
)
from assessment_model.registry.types import (
    BUTTON_ACTION_INFO,
    IMAGE_INFO,
    INPUT_ITEM,
    NODE,
    TypeRegistry,
)

logger = logging.getLogger(__name__)

STANDARD_VARIANTS: dict[str, list[type]] = {
    NODE: [
        ActiveStep,
        AssessmentPlaceholder,
        Assessment,
        ChoiceQuestion,
        CompletionStep,
        CountdownStep,
        InstructionStep,
        MultipleInputQuestion,
        OverviewStep,
        PermissionStep,
        ResultSummaryStep,
        SimpleQuestion,
        Section,
        TransformableAssessment,
        TransformableNode,
    ],
    BUTTON_ACTION_INFO: [DefaultButtonActionInfo, NavigationButtonActionInfo],
    INPUT_ITEM: [
        StringTextInputItem,
        IntegerTextInputItem,
        DecimalTextInputItem,
        YearTextInputItem,
        CheckboxInputItem,
    ],
    IMAGE_INFO: [FetchableImage, AnimatedImage],
}

_default_registry: TypeRegistry | None = None
_init_lock = threading.Lock()


def discriminator_of(model: type) -> str:
    """Read the discriminator default declared on a model class."""
    return model.model_fields["type"].default


def create_registry() -> TypeRegistry:
    """Create an unfrozen registry holding every standard variant.

    Returns:
        A TypeRegistry that still accepts registrations.
    """
    registry = TypeRegistry()
    for family, models in STANDARD_VARIANTS.items():
        for model in models:
            registry.register(discriminator_of(model), model, family=family)
    return registry


def _install(configure: Callable[[TypeRegistry], None] | None) -> TypeRegistry:
    global _default_registry
    registry = create_registry()
    if configure is not None:
        configure(registry)
    registry.freeze()
    _default_registry = registry
    logger.debug(f"Initialized type registry with {len(registry.variants(NODE))} node variants")
    return registry


def init_registry(
    configure: Callable[[TypeRegistry], None] | None = None,
) -> TypeRegistry:
    """Build and freeze the process-wide registry.

    Args:
        configure: Optional callback that registers additional variants
            before the registry is frozen.

    Returns:
        The frozen process-wide registry.

    Raises:
        RuntimeError: If the registry was already initialized.
    """
    with _init_lock:
        if _default_registry is not None:
            raise RuntimeError("The default type registry is already initialized")
        return _install(configure)


def get_default_registry() -> TypeRegistry:
    """Get the process-wide registry, initializing it on first use.

    Returns:
        The frozen default TypeRegistry.
    """
    if _default_registry is None:
        with _init_lock:
            if _default_registry is None:
                _install(None)
    assert _default_registry is not None
    return _default_registry


def reset_default_registry() -> None:
    """Discard the process-wide registry. Intended for test isolation only."""
    global _default_registry
    with _init_lock:
        _default_registry = None

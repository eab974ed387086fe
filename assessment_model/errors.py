"""Error taxonomy for decoding, registry lookups, and unpacking.

Every error raised by the library derives from AssessmentModelError so host
applications can catch the whole family at one seam. Decode errors carry the
failing identifier and the path of ancestor identifiers so a host can report
which resource is broken.
"""


class AssessmentModelError(Exception):
    """Base class for all assessment-model errors."""

    def __init__(self, message: str, identifier: str | None = None) -> None:
        self.identifier = identifier
        self.path: list[str] = []
        super().__init__(message)

    def add_parent(self, identifier: str | None) -> None:
        """Prepend an ancestor identifier to the error path."""
        if identifier:
            self.path.insert(0, identifier)

    @property
    def location(self) -> str:
        """Slash-joined ancestor path ending at the failing identifier."""
        parts = list(self.path)
        if self.identifier:
            parts.append(self.identifier)
        return "/".join(parts)


class UnknownVariantError(AssessmentModelError):
    """Raised when a discriminator has no registered variant.

    Recoverable: callers decide whether to skip the node or abort the load.
    """

    def __init__(self, type_name: str, family: str, identifier: str | None = None) -> None:
        self.type_name = type_name
        self.family = family
        super().__init__(f"Unknown {family} type: {type_name!r}", identifier)


class SchemaViolationError(AssessmentModelError):
    """Raised when a required field is missing or holds the wrong type."""

    def __init__(
        self,
        field: str,
        variant: str | None,
        message: str,
        identifier: str | None = None,
    ) -> None:
        self.field = field
        self.variant = variant
        super().__init__(
            f"Schema violation in {variant or 'payload'} field {field!r}: {message}",
            identifier,
        )


class UnpackTypeMismatchError(AssessmentModelError):
    """Raised when an original and a transform belong to different node families."""

    def __init__(self, transform_type: str, original_type: str, identifier: str | None = None) -> None:
        self.transform_type = transform_type
        self.original_type = original_type
        super().__init__(
            f"Cannot unpack {transform_type!r} onto original of type {original_type!r}",
            identifier,
        )


class ResourceNotFoundError(AssessmentModelError):
    """Raised by a resource provider when a named resource is not available."""

    def __init__(self, name: str, version: str | None = None) -> None:
        self.name = name
        self.version = version
        label = f"{name}@{version}" if version else name
        super().__init__(f"Resource not found: {label}")


class RegistryFrozenError(AssessmentModelError):
    """Raised when registering a variant after the registry was frozen."""

    def __init__(self, type_name: str, family: str) -> None:
        self.type_name = type_name
        self.family = family
        super().__init__(
            f"Cannot register {family} type {type_name!r}: registry is frozen"
        )

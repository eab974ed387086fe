"""Image references attached to steps and containers."""

from typing import Any, Literal

from pydantic import Field, PrivateAttr

from assessment_model.models.wire import WireModel, polymorphic
from assessment_model.registry.types import IMAGE_INFO


class ImageSize(WireModel):
    """Display size of an image, in points."""

    width: float
    height: float


class ImageInfo(WireModel):
    """Base for image references."""

    type: str
    label: str | None = None
    bundle_identifier: str | None = None
    package_name: str | None = None


class FetchableImage(ImageInfo):
    """An image identified by name and resource bundle.

    A host may attach the loaded image with `with_resolved_image`. The
    resolved handle is internal: it is never encoded and is ignored by
    equality, so the image still re-encodes as its name and bundle.
    """

    type: Literal["fetchable"] = "fetchable"
    image_name: str
    placement_type: str | None = None
    size: ImageSize | None = None

    _resolved_image: Any = PrivateAttr(default=None)

    @property
    def resolved_image(self) -> Any:
        """The host-supplied image handle, if one was attached."""
        return self._resolved_image

    def with_resolved_image(self, handle: Any) -> "FetchableImage":
        """Return a copy of this image carrying a resolved handle."""
        copy = self.model_copy()
        copy._resolved_image = handle
        return copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FetchableImage):
            return NotImplemented
        return self.model_dump() == other.model_dump()

    @classmethod
    def examples(cls) -> list["FetchableImage"]:
        return [
            cls(image_name="before"),
            cls(
                image_name="walking",
                bundle_identifier="org.example.SharedResources",
                label="A person walking",
                placement_type="iconBefore",
                size=ImageSize(width=100, height=120),
            ),
        ]


class AnimatedImage(ImageInfo):
    """A sequence of images played as an animation."""

    type: Literal["animated"] = "animated"
    image_names: list[str]
    animation_duration: float = Field(gt=0)

    @classmethod
    def examples(cls) -> list["AnimatedImage"]:
        return [
            cls(
                image_names=["walk1", "walk2", "walk3"],
                animation_duration=2.0,
                package_name="org.example.shared",
            )
        ]


ImageField = polymorphic(ImageInfo, IMAGE_INFO)

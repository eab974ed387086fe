"""Lightweight stand-ins for nodes that have not been fetched yet.

A placeholder carries an identifier and a resource locator. The unpack
engine fetches the resource, decodes it, and replaces the placeholder with
the resolved node.
"""

from abc import abstractmethod
from typing import Literal

from pydantic import Field

from assessment_model.models.base import Node
from assessment_model.models.wire import WireModel


class AssessmentInfo(WireModel):
    """Identifying metadata for an assessment resource."""

    identifier: str
    version_string: str | None = None
    schema_identifier: str | None = None
    guid: str | None = None
    estimated_minutes: int = Field(default=0, ge=0)


class PlaceholderNode(Node):
    """Base for nodes that are replaced by a fetched resource."""

    comment: str | None = None

    @abstractmethod
    def locator(self) -> tuple[str, str | None]:
        """The (resource name, version) to fetch."""


class AssessmentPlaceholder(PlaceholderNode):
    """Reference to an assessment registered with the host application."""

    type: Literal["assessmentPlaceholder"] = "assessmentPlaceholder"
    assessment_info: AssessmentInfo
    title: str | None = None
    subtitle: str | None = None
    detail: str | None = None

    def locator(self) -> tuple[str, str | None]:
        return self.assessment_info.identifier, self.assessment_info.version_string

    @classmethod
    def examples(cls) -> list["AssessmentPlaceholder"]:
        return [
            cls(
                identifier="walk",
                assessment_info=AssessmentInfo(identifier="walkTest", version_string="1.0.0"),
                title="Walk test",
            )
        ]


class TransformableNode(PlaceholderNode):
    """Reference to a node stored in a separate resource."""

    type: Literal["transform"] = "transform"
    resource_name: str
    version_string: str | None = None

    def locator(self) -> tuple[str, str | None]:
        return self.resource_name, self.version_string

    @classmethod
    def examples(cls) -> list["TransformableNode"]:
        return [cls(identifier="introduction", resource_name="sharedIntroduction")]


class TransformableAssessment(PlaceholderNode):
    """Reference to a whole assessment stored in a separate resource."""

    type: Literal["transformableAssessment"] = "transformableAssessment"
    resource_name: str
    version_string: str | None = None
    estimated_minutes: int = Field(default=0, ge=0)
    schema_identifier: str | None = None
    title: str | None = None
    subtitle: str | None = None
    detail: str | None = None

    def locator(self) -> tuple[str, str | None]:
        return self.resource_name, self.version_string

    @property
    def image_info(self) -> None:
        return None

    def to_assessment_info(self) -> AssessmentInfo:
        """Metadata handed to a host-supplied decoder lookup."""
        return AssessmentInfo(
            identifier=self.identifier,
            version_string=self.version_string,
            schema_identifier=self.schema_identifier,
            estimated_minutes=self.estimated_minutes,
        )

    @classmethod
    def examples(cls) -> list["TransformableAssessment"]:
        return [
            cls(
                identifier="tapping",
                resource_name="tapping",
                version_string="2.1.0",
                estimated_minutes=2,
                title="Tapping test",
            )
        ]

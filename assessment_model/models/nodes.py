"""Containers and informational steps."""

from typing import Literal

from pydantic import ConfigDict, Field

from assessment_model.models.buttons import ButtonActionField, DefaultButtonActionInfo
from assessment_model.models.enums import ButtonAction, PermissionType, SpokenInstructionTiming
from assessment_model.models.images import FetchableImage
from assessment_model.models.base import NodeContainer, Step
from assessment_model.models.wire import WireModel


class AsyncActionConfiguration(WireModel):
    """Configuration for a background recorder or sensor.

    Only the identifier and type are interpreted here. Any other fields are
    preserved so the payload round-trips for the host that runs the action.
    """

    model_config = ConfigDict(extra="allow")

    type: str
    identifier: str
    start_step_identifier: str | None = None


class InterruptionHandling(WireModel):
    """Whether and how an assessment may resume after being backgrounded."""

    can_resume: bool = True
    review_identifier: str | None = None
    can_skip: bool = True
    can_save_for_later: bool = True


class Assessment(NodeContainer):
    """Root container of an assessment tree."""

    type: Literal["assessment"] = "assessment"
    guid: str | None = None
    version_string: str | None = None
    schema_identifier: str | None = None
    estimated_minutes: int = Field(default=0, ge=0)
    async_actions: list[AsyncActionConfiguration] = Field(default=[], alias="asyncActions")
    copyright: str | None = None
    schema_url: str | None = Field(default=None, alias="$schema")
    interruption_handling: InterruptionHandling = InterruptionHandling()

    @classmethod
    def examples(cls) -> list["Assessment"]:
        return [
            cls(
                identifier="foo",
                children=[
                    InstructionStep(identifier="intro", title="Welcome"),
                    CompletionStep(identifier="done", title="All done"),
                ],
                version_string="1.0.2",
                estimated_minutes=3,
                copyright="Copyright (c) 2022 Sage Bionetworks",
                title="Hello World!",
                image_info=FetchableImage(image_name="fooIcon"),
                progress_markers=["intro"],
                interruption_handling=InterruptionHandling(can_resume=False),
            )
        ]


class Section(NodeContainer):
    """A grouping of nodes within an assessment."""

    type: Literal["section"] = "section"
    async_actions: list[AsyncActionConfiguration] = Field(default=[], alias="asyncActions")

    @classmethod
    def examples(cls) -> list["Section"]:
        return [
            cls(
                identifier="intro",
                children=[
                    InstructionStep(identifier="a"),
                    CompletionStep(identifier="b"),
                ],
                async_actions=[AsyncActionConfiguration(type="motion", identifier="motion")],
            )
        ]


class InstructionStep(Step):
    """A screen of instructions."""

    type: Literal["instruction"] = "instruction"
    full_instructions_only: bool = False

    @classmethod
    def examples(cls) -> list["InstructionStep"]:
        return [
            cls(identifier="instruction"),
            cls(
                identifier="instruction",
                title="Hello World!",
                detail="Some text. This is a test.",
                footnote="This is a footnote.",
                image_info=FetchableImage(image_name="before", bundle_identifier="org.example.SharedResources"),
                hide_buttons=[ButtonAction.GO_BACKWARD],
                button_map={
                    ButtonAction.GO_FORWARD: DefaultButtonActionInfo(button_title="Go, Dogs! Go"),
                },
                spoken_instructions={SpokenInstructionTiming.START: "Start walking."},
                next_node_identifier="countdown",
                full_instructions_only=True,
            ),
        ]


class CompletionStep(Step):
    """The final screen of an assessment."""

    type: Literal["completion"] = "completion"

    @classmethod
    def examples(cls) -> list["CompletionStep"]:
        return [cls(identifier="completion", title="Well done!", detail="Thank you for being awesome.")]


class PermissionInfo(WireModel):
    """A device permission requested by an overview step."""

    permission_type: PermissionType
    optional: bool = False
    restricted_message: str | None = None
    denied_message: str | None = None


class PermissionStep(Step):
    """A screen that requests a single device permission.

    The step is itself the only member of its permission list.
    """

    type: Literal["permission"] = "permission"
    permission_type: PermissionType
    optional: bool = True
    restricted_message: str | None = None
    denied_message: str | None = None

    @property
    def permissions(self) -> list["PermissionStep"]:
        return [self]

    @classmethod
    def examples(cls) -> list["PermissionStep"]:
        return [
            cls(
                identifier="permission",
                permission_type=PermissionType.MOTION,
                title="Motion permission",
                optional=False,
                denied_message="You have previously denied access to motion data.",
            )
        ]


class IconInfo(WireModel):
    """An icon with a caption, shown on an overview step."""

    icon: str | None = None
    title: str | None = None


class OverviewStep(Step):
    """Introductory screen listing what the assessment will need."""

    type: Literal["overview"] = "overview"
    icons: list[IconInfo] | None = None
    permissions: list[PermissionInfo] | None = None
    learn_more: ButtonActionField | None = None

    @classmethod
    def examples(cls) -> list["OverviewStep"]:
        return [
            cls(
                identifier="overview",
                title="Walk test",
                icons=[IconInfo(icon="comfortablePlace", title="A comfortable place")],
                permissions=[PermissionInfo(permission_type=PermissionType.MOTION)],
                learn_more=DefaultButtonActionInfo(button_title="See this in action"),
            )
        ]


class ResultSummaryStep(Step):
    """Feedback screen computed from a previously collected result."""

    type: Literal["feedback"] = "feedback"
    scoring_result_path: str | None = None
    result_title: str | None = None

    @classmethod
    def examples(cls) -> list["ResultSummaryStep"]:
        return [
            cls(
                identifier="feedback",
                scoring_result_path="walk/steps",
                result_title="You walked",
            )
        ]

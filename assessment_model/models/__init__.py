"""Node schema: assessments, sections, steps, questions, and placeholders."""

from assessment_model.models.active import (
    COUNTDOWN_COMMANDS,
    ActiveStep,
    BaseActiveStep,
    CountdownStep,
)
from assessment_model.models.base import ContentNode, Node, NodeContainer, Step, ViewTheme
from assessment_model.models.buttons import (
    ButtonActionInfo,
    DefaultButtonActionInfo,
    NavigationButtonActionInfo,
)
from assessment_model.models.enums import (
    ActiveStepCommand,
    BaseType,
    ButtonAction,
    PermissionType,
    ReservedNavigationIdentifier,
    SpokenInstructionTiming,
    SurveyRuleOperator,
    UIHint,
)
from assessment_model.models.images import AnimatedImage, FetchableImage, ImageInfo, ImageSize
from assessment_model.models.inputs import (
    CheckboxInputItem,
    DecimalTextInputItem,
    InputItem,
    IntegerTextInputItem,
    StringTextInputItem,
    YearTextInputItem,
)
from assessment_model.models.nodes import (
    Assessment,
    AsyncActionConfiguration,
    CompletionStep,
    IconInfo,
    InstructionStep,
    InterruptionHandling,
    OverviewStep,
    PermissionInfo,
    PermissionStep,
    ResultSummaryStep,
    Section,
)
from assessment_model.models.placeholders import (
    AssessmentInfo,
    AssessmentPlaceholder,
    PlaceholderNode,
    TransformableAssessment,
    TransformableNode,
)
from assessment_model.models.questions import (
    ChoiceOption,
    ChoiceQuestion,
    MultipleInputQuestion,
    Question,
    SimpleQuestion,
    SurveyRule,
)

__all__ = [
    # Bases
    "Node",
    "ContentNode",
    "Step",
    "NodeContainer",
    "PlaceholderNode",
    "Question",
    "BaseActiveStep",
    # Containers
    "Assessment",
    "Section",
    "AsyncActionConfiguration",
    "InterruptionHandling",
    # Steps
    "InstructionStep",
    "CompletionStep",
    "PermissionStep",
    "PermissionInfo",
    "OverviewStep",
    "IconInfo",
    "ResultSummaryStep",
    "ActiveStep",
    "CountdownStep",
    "COUNTDOWN_COMMANDS",
    "ViewTheme",
    # Questions
    "SimpleQuestion",
    "MultipleInputQuestion",
    "ChoiceQuestion",
    "ChoiceOption",
    "SurveyRule",
    # Input items
    "InputItem",
    "StringTextInputItem",
    "IntegerTextInputItem",
    "DecimalTextInputItem",
    "YearTextInputItem",
    "CheckboxInputItem",
    # Images and buttons
    "ImageInfo",
    "FetchableImage",
    "AnimatedImage",
    "ImageSize",
    "ButtonActionInfo",
    "DefaultButtonActionInfo",
    "NavigationButtonActionInfo",
    # Placeholders
    "AssessmentInfo",
    "AssessmentPlaceholder",
    "TransformableNode",
    "TransformableAssessment",
    # Enums
    "ActiveStepCommand",
    "BaseType",
    "ButtonAction",
    "PermissionType",
    "ReservedNavigationIdentifier",
    "SpokenInstructionTiming",
    "SurveyRuleOperator",
    "UIHint",
]

"""Tests for decoding and encoding nodes."""

import json
import logging
from typing import Any

import pytest

from assessment_model.diagnostics import LoadReport, LoadStatus
from assessment_model.errors import SchemaViolationError, UnknownVariantError
from assessment_model.factory import create_registry
from assessment_model.models import (
    ActiveStep,
    ActiveStepCommand,
    Assessment,
    ButtonAction,
    ChoiceQuestion,
    CompletionStep,
    CountdownStep,
    DefaultButtonActionInfo,
    FetchableImage,
    InstructionStep,
    Section,
    SurveyRuleOperator,
)
from assessment_model.registry import NODE, TypeRegistry
from assessment_model.serialization import (
    DecodePolicy,
    decode,
    decode_node,
    dumps_node,
    encode,
    encode_node,
    loads_node,
)

_REGISTRY = create_registry()
ALL_EXAMPLES = [
    pytest.param(family, example, id=f"{family}-{example.type}-{index}")
    for family in _REGISTRY.families
    for index, example in enumerate(_REGISTRY.all_registered_examples(family))
]


class TestRoundTrip:
    """Tests for the decode(encode(x)) == x law."""

    @pytest.mark.parametrize("family,example", ALL_EXAMPLES)
    def test_example_round_trips(self, family: str, example: Any, registry: TypeRegistry) -> None:
        """Test every registered example survives encode then decode."""
        payload = encode(example)
        assert decode(payload, family, registry) == example

    @pytest.mark.parametrize("family,example", ALL_EXAMPLES)
    def test_example_survives_json_text(self, family: str, example: Any, registry: TypeRegistry) -> None:
        """Test encoded examples are plain JSON."""
        text = json.dumps(encode(example))
        assert decode(json.loads(text), family, registry) == example

    def test_sample_assessment_round_trips(self, assessment_payload: dict[str, Any], registry: TypeRegistry) -> None:
        """Test a decoded payload re-encodes to an equivalent payload."""
        node = decode_node(assessment_payload, registry)
        assert decode_node(encode_node(node), registry) == node


class TestCanonicalOmission:
    """Tests for omitting fields equal to their defaults."""

    def test_step_with_defaults(self) -> None:
        """Test a step with only defaults encodes to discriminator and identifier."""
        assert encode(InstructionStep(identifier="a")) == {"type": "instruction", "identifier": "a"}

    def test_countdown_with_defaults(self) -> None:
        """Test the countdown's default duration and commands are omitted."""
        assert encode(CountdownStep(identifier="c")) == {"type": "countdown", "identifier": "c"}

    def test_active_step_with_defaults(self) -> None:
        """Test an active step without commands encodes only its required fields."""
        assert encode(ActiveStep(identifier="a", duration=1)) == {"type": "active", "identifier": "a", "duration": 1.0}

    def test_countdown_extra_command_kept(self) -> None:
        """Test a countdown with more than its default commands writes them all."""
        step = CountdownStep(identifier="c", commands=frozenset({ActiveStepCommand.VIBRATE_ON_START}))
        assert encode(step)["commands"] == ["continueOnFinish", "startTimerAutomatically", "vibrateOnStart"]

    def test_container_keeps_required_children(self) -> None:
        """Test an empty children list is still written."""
        assert encode(Section(identifier="s", children=[])) == {
            "type": "section",
            "identifier": "s",
            "steps": [],
        }

    def test_discriminator_first(self) -> None:
        """Test the discriminator is the first key."""
        payload = encode(CompletionStep(identifier="done", title="Bye"))
        assert list(payload) == ["type", "identifier", "title"]

    def test_missing_optional_fields_decode_to_defaults(self, registry: TypeRegistry) -> None:
        """Test omitted fields take their documented defaults."""
        question = decode_node(
            {"type": "choiceQuestion", "identifier": "q", "choices": []}, registry
        )
        assert isinstance(question, ChoiceQuestion)
        assert question.single_answer is True
        assert question.optional is False
        assert question.survey_rules == []
        assert question.hide_buttons == []
        assert question.button_map == {}


class TestWireAliases:
    """Tests for the verbatim wire names."""

    def test_step_aliases(self, registry: TypeRegistry) -> None:
        """Test step fields decode from their wire aliases."""
        step = decode_node(
            {
                "type": "instruction",
                "identifier": "a",
                "shouldHideActions": ["goBackward"],
                "actions": {"goForward": {"type": "default", "buttonTitle": "Next"}},
                "nextStepIdentifier": "b",
                "image": {"type": "fetchable", "imageName": "pic"},
            },
            registry,
        )

        assert step.hide_buttons == [ButtonAction.GO_BACKWARD]
        assert step.button_map[ButtonAction.GO_FORWARD] == DefaultButtonActionInfo(button_title="Next")
        assert step.next_node_identifier == "b"
        assert step.image_info == FetchableImage(image_name="pic")

    def test_container_aliases(self, assessment_payload: dict[str, Any], registry: TypeRegistry) -> None:
        """Test container fields decode from their wire aliases."""
        assessment = decode_node(assessment_payload, registry)

        assert isinstance(assessment, Assessment)
        assert assessment.child_identifiers == ["intro", "habits", "done"]
        assert assessment.schema_url == "https://example.org/schemas/assessment.json"
        assert assessment.image_info == FetchableImage(image_name="sleepIcon")

    def test_container_icon_encodes_as_name(self) -> None:
        """Test a container icon is written as a bare image name."""
        section = Section(identifier="s", children=[], image_info=FetchableImage(image_name="pic"))
        assert encode(section)["icon"] == "pic"

    def test_container_icon_with_bundle_round_trips(self, registry: TypeRegistry) -> None:
        """Test an icon with more than a name is written as a full image object."""
        payload = {
            "type": "section",
            "identifier": "s",
            "steps": [],
            "icon": {"type": "fetchable", "imageName": "pic", "bundleIdentifier": "org.example"},
        }

        section = decode_node(payload, registry)

        assert section.image_info.bundle_identifier == "org.example"
        assert encode(section) == payload
        assert decode_node(encode(section), registry) == section

    def test_web_config_round_trips(self, registry: TypeRegistry) -> None:
        """Test webConfig is kept verbatim through decode and encode."""
        payload = {"type": "instruction", "identifier": "a", "webConfig": {"skipOption": "SKIP"}}

        step = decode_node(payload, registry)

        assert step.web_config == {"skipOption": "SKIP"}
        assert encode_node(step) == payload

    def test_single_choice_alias(self) -> None:
        """Test single_answer is written as singleChoice."""
        question = ChoiceQuestion(identifier="q", choices=[], single_answer=False)
        assert encode(question)["singleChoice"] is False

    def test_unknown_fields_ignored(self, registry: TypeRegistry) -> None:
        """Test fields this version does not know about are ignored."""
        step = decode_node(
            {"type": "completion", "identifier": "done", "webConfig": {"theme": "dark"}},
            registry,
        )
        assert step == CompletionStep(identifier="done")


class TestActiveStepCommands:
    """Tests for active-step command tokens."""

    def test_commands_encode_sorted(self) -> None:
        """Test commands are written as sorted tokens."""
        step = ActiveStep(
            identifier="walk",
            duration=10,
            commands=frozenset({ActiveStepCommand.VIBRATE_ON_FINISH, ActiveStepCommand.PLAY_SOUND_ON_START}),
        )
        assert encode(step)["commands"] == ["playSoundOnStart", "vibrateOnFinish"]

    def test_shorthand_tokens_expand(self, registry: TypeRegistry) -> None:
        """Test playSound and vibrate expand to start and finish commands."""
        step = decode_node(
            {"type": "active", "identifier": "walk", "duration": 10, "commands": ["playSound", "vibrate"]},
            registry,
        )
        assert step.commands == {
            ActiveStepCommand.PLAY_SOUND_ON_START,
            ActiveStepCommand.PLAY_SOUND_ON_FINISH,
            ActiveStepCommand.VIBRATE_ON_START,
            ActiveStepCommand.VIBRATE_ON_FINISH,
        }

    def test_unknown_token_dropped(self, registry: TypeRegistry, caplog: pytest.LogCaptureFixture) -> None:
        """Test unknown tokens are dropped with a warning."""
        with caplog.at_level(logging.WARNING):
            step = decode_node(
                {"type": "active", "identifier": "walk", "duration": 10, "commands": ["levitate", "vibrateOnStart"]},
                registry,
            )

        assert step.commands == {ActiveStepCommand.VIBRATE_ON_START}
        assert "levitate" in caplog.text

    def test_commands_must_be_a_list(self, registry: TypeRegistry) -> None:
        """Test a bare string is a schema violation."""
        with pytest.raises(SchemaViolationError) as exc_info:
            decode_node({"type": "active", "identifier": "walk", "duration": 10, "commands": "vibrate"}, registry)

        assert exc_info.value.field == "commands"

    def test_countdown_always_has_countdown_commands(self, registry: TypeRegistry) -> None:
        """Test a countdown unions its configured commands with auto-start and auto-continue."""
        step = decode_node(
            {"type": "countdown", "identifier": "c", "commands": ["vibrateOnFinish"]},
            registry,
        )
        assert step.commands == {
            ActiveStepCommand.VIBRATE_ON_FINISH,
            ActiveStepCommand.START_TIMER_AUTOMATICALLY,
            ActiveStepCommand.CONTINUE_ON_FINISH,
        }

    def test_countdown_cannot_remove_commands(self) -> None:
        """Test configuring an empty command set still keeps the countdown commands."""
        step = CountdownStep(identifier="c", commands=frozenset())
        assert ActiveStepCommand.START_TIMER_AUTOMATICALLY in step.commands
        assert ActiveStepCommand.CONTINUE_ON_FINISH in step.commands


class TestDecodeErrors:
    """Tests for decode error classification."""

    def test_unknown_discriminator(self, registry: TypeRegistry) -> None:
        """Test an unknown type raises UnknownVariantError, not a parse error."""
        with pytest.raises(UnknownVariantError) as exc_info:
            decode_node({"type": "hologram", "identifier": "h"}, registry)

        assert exc_info.value.type_name == "hologram"
        assert exc_info.value.identifier == "h"

    def test_missing_discriminator(self, registry: TypeRegistry) -> None:
        """Test a payload without a type is a schema violation."""
        with pytest.raises(SchemaViolationError) as exc_info:
            decode_node({"identifier": "a"}, registry)

        assert exc_info.value.field == "type"

    def test_non_object_payload(self, registry: TypeRegistry) -> None:
        """Test a non-object payload is a schema violation."""
        with pytest.raises(SchemaViolationError):
            decode_node(["instruction"], registry)

    def test_missing_required_field(self, registry: TypeRegistry) -> None:
        """Test a missing required field names the field and variant."""
        with pytest.raises(SchemaViolationError) as exc_info:
            decode_node({"type": "permission", "identifier": "p"}, registry)

        error = exc_info.value
        assert error.field == "permissionType"
        assert error.variant == "permission"
        assert error.identifier == "p"
        assert "required field is missing" in str(error)

    def test_wrong_primitive_type(self, registry: TypeRegistry) -> None:
        """Test a value of the wrong type is a schema violation."""
        with pytest.raises(SchemaViolationError) as exc_info:
            decode_node({"type": "active", "identifier": "walk", "duration": "long"}, registry)

        assert exc_info.value.field == "duration"

    def test_negative_duration(self, registry: TypeRegistry) -> None:
        """Test durations cannot be negative."""
        with pytest.raises(SchemaViolationError):
            decode_node({"type": "active", "identifier": "walk", "duration": -1}, registry)

    def test_nested_error_carries_path(self, registry: TypeRegistry) -> None:
        """Test a nested failure bubbles with its ancestor identifiers."""
        payload = {
            "type": "assessment",
            "identifier": "root",
            "steps": [
                {
                    "type": "section",
                    "identifier": "part1",
                    "steps": [{"type": "hologram", "identifier": "h"}],
                }
            ],
        }

        with pytest.raises(UnknownVariantError) as exc_info:
            decode_node(payload, registry)

        assert exc_info.value.path == ["root", "part1"]
        assert exc_info.value.location == "root/part1/h"

    def test_nested_polymorphic_field_error(self, registry: TypeRegistry) -> None:
        """Test an unknown button action type is reported in its own family."""
        with pytest.raises(UnknownVariantError) as exc_info:
            decode_node(
                {"type": "instruction", "identifier": "a", "actions": {"skip": {"type": "laser"}}},
                registry,
            )

        assert exc_info.value.family == "buttonActionInfo"
        assert exc_info.value.path == ["a"]

    def test_steps_must_be_a_list(self, registry: TypeRegistry) -> None:
        """Test a container with non-list children is a schema violation."""
        with pytest.raises(SchemaViolationError) as exc_info:
            decode_node({"type": "section", "identifier": "s", "steps": {"a": 1}}, registry)

        assert exc_info.value.field == "steps"

    def test_uses_given_registry(self, registry: TypeRegistry) -> None:
        """Test decode resolves discriminators in the given registry."""
        empty = TypeRegistry()
        with pytest.raises(UnknownVariantError):
            decode_node({"type": "instruction", "identifier": "a"}, empty)
        assert decode_node({"type": "instruction", "identifier": "a"}, registry) == InstructionStep(identifier="a")


class TestSkipInvalidChildren:
    """Tests for the lenient decode policy."""

    @pytest.fixture
    def payload(self) -> dict[str, Any]:
        return {
            "type": "section",
            "identifier": "s",
            "steps": [
                {"type": "instruction", "identifier": "ok"},
                {"type": "hologram", "identifier": "future"},
                {"type": "permission", "identifier": "broken"},
            ],
        }

    def test_strict_policy_raises(self, payload: dict[str, Any], registry: TypeRegistry) -> None:
        """Test the strict policy aborts on the first bad child."""
        with pytest.raises(UnknownVariantError):
            decode_node(payload, registry)

    def test_skip_policy_drops_bad_children(self, payload: dict[str, Any], registry: TypeRegistry) -> None:
        """Test bad children are dropped and recorded."""
        report = LoadReport("section.json")
        section = decode_node(payload, registry, DecodePolicy.SKIP_INVALID_CHILDREN, report)

        assert section.child_identifiers == ["ok"]
        diagnostic = report.finalize()
        assert diagnostic.status == LoadStatus.PARTIAL
        assert [issue.code for issue in diagnostic.skipped] == ["UNKNOWN_VARIANT", "SCHEMA_VIOLATION"]
        assert [issue.identifier for issue in diagnostic.skipped] == ["future", "broken"]
        assert diagnostic.nodes_decoded == 2

    def test_skip_policy_without_report_logs(
        self, payload: dict[str, Any], registry: TypeRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test dropped children are logged when no report is given."""
        with caplog.at_level(logging.WARNING):
            section = decode_node(payload, registry, DecodePolicy.SKIP_INVALID_CHILDREN)

        assert section.child_identifiers == ["ok"]
        assert "Skipping child" in caplog.text


class TestTextHelpers:
    """Tests for the JSON text helpers."""

    def test_loads_and_dumps(self, registry: TypeRegistry) -> None:
        """Test JSON text round trip."""
        step = InstructionStep(identifier="a", title="Hello")
        text = dumps_node(step)
        assert json.loads(text) == {"type": "instruction", "identifier": "a", "title": "Hello"}
        assert loads_node(text, registry) == step

    def test_loads_bytes(self, registry: TypeRegistry) -> None:
        """Test bytes are accepted."""
        assert loads_node(b'{"type": "completion", "identifier": "done"}', registry) == CompletionStep(
            identifier="done"
        )

    def test_malformed_json(self, registry: TypeRegistry) -> None:
        """Test malformed JSON is a schema violation."""
        with pytest.raises(SchemaViolationError) as exc_info:
            loads_node("{not json", registry)

        assert exc_info.value.field == "<json>"

    def test_default_registry_used(self) -> None:
        """Test decode falls back to the process-wide registry."""
        assert decode({"type": "completion", "identifier": "done"}, NODE) == CompletionStep(identifier="done")


class TestSurveyRuleDecoding:
    """Tests for survey rule defaults on the wire."""

    def test_null_operator_is_equal(self, registry: TypeRegistry) -> None:
        """Test an explicit null operator decodes to equality."""
        question = decode_node(
            {
                "type": "choiceQuestion",
                "identifier": "q",
                "choices": [],
                "surveyRules": [{"matchingAnswer": 1, "ruleOperator": None}],
            },
            registry,
        )
        rule = question.survey_rules[0]
        assert rule.rule_operator == SurveyRuleOperator.EQUAL
        assert rule.skip_to_identifier == "exit"

    def test_null_rules_decode_empty(self, registry: TypeRegistry) -> None:
        """Test null survey rules decode to an empty list."""
        question = decode_node(
            {"type": "choiceQuestion", "identifier": "q", "choices": [], "surveyRules": None},
            registry,
        )
        assert question.survey_rules == []


class TestFetchableImage:
    """Tests for the internal resolved image handle."""

    def test_resolved_handle_not_encoded(self) -> None:
        """Test the resolved handle is ignored by encoding and equality."""
        image = FetchableImage(image_name="moon", bundle_identifier="org.example")
        resolved = image.with_resolved_image(object())

        assert resolved.resolved_image is not None
        assert image.resolved_image is None
        assert resolved == image
        assert encode(resolved) == {"type": "fetchable", "imageName": "moon", "bundleIdentifier": "org.example"}

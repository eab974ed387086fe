"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from assessment_model.factory import create_registry, reset_default_registry
from assessment_model.registry import TypeRegistry
from assessment_model.resources import InMemoryRegistryProvider, InMemoryResourceProvider


@pytest.fixture(autouse=True)
def isolated_default_registry() -> Iterator[None]:
    """Discard the process-wide registry around every test."""
    reset_default_registry()
    yield
    reset_default_registry()


@pytest.fixture
def registry() -> TypeRegistry:
    """Return a fresh, unfrozen registry with the standard variants."""
    return create_registry()


@pytest.fixture
def resources() -> InMemoryResourceProvider:
    """Return an empty in-memory resource provider."""
    return InMemoryResourceProvider()


@pytest.fixture
def registry_provider() -> InMemoryRegistryProvider:
    """Return an empty in-memory registry of originals and decoders."""
    return InMemoryRegistryProvider()


@pytest.fixture
def assessment_payload() -> dict[str, Any]:
    """Return the wire form of a small assessment."""
    return {
        "type": "assessment",
        "identifier": "sleep",
        "versionString": "1.0.0",
        "estimatedMinutes": 2,
        "$schema": "https://example.org/schemas/assessment.json",
        "icon": "sleepIcon",
        "steps": [
            {
                "type": "instruction",
                "identifier": "intro",
                "title": "About your sleep",
                "image": {"type": "fetchable", "imageName": "moon"},
            },
            {
                "type": "section",
                "identifier": "habits",
                "steps": [
                    {
                        "type": "choiceQuestion",
                        "identifier": "nap",
                        "title": "Do you nap?",
                        "baseType": "boolean",
                        "choices": [
                            {"value": True, "text": "Yes"},
                            {"value": False, "text": "No"},
                        ],
                        "surveyRules": [{"matchingAnswer": False, "skipToIdentifier": "done"}],
                    },
                    {
                        "type": "countdown",
                        "identifier": "countdown",
                        "commands": ["playSound"],
                    },
                ],
            },
            {"type": "completion", "identifier": "done", "nextStepIdentifier": "exit"},
        ],
    }


@pytest.fixture
def resource_dir(tmp_path: Path, assessment_payload: dict[str, Any]) -> Path:
    """Return a directory holding the sample assessment as a resource."""
    root = tmp_path / "resources"
    root.mkdir()
    (root / "sleep.json").write_text(json.dumps(assessment_payload))
    versioned = root / "sleep"
    versioned.mkdir()
    pinned = dict(assessment_payload, versionString="2.0.0")
    (versioned / "2-0-0.json").write_text(json.dumps(pinned))
    return root


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global configuration at a temporary home directory."""
    home = tmp_path / "home"
    monkeypatch.setenv("ASSESSMENT_MODEL_HOME", str(home))
    monkeypatch.delenv("ASSESSMENT_MODEL_RESOURCES", raising=False)
    monkeypatch.delenv("ASSESSMENT_MODEL_LOG_LEVEL", raising=False)
    return home

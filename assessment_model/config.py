"""Global configuration for the assessment-model CLI.

Configuration lives in ~/.config/assessment-model/config.yaml unless
ASSESSMENT_MODEL_HOME points elsewhere. Environment variables override the
file.
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from assessment_model.serialization.codec import DecodePolicy

HOME_ENV = "ASSESSMENT_MODEL_HOME"
RESOURCES_ENV = "ASSESSMENT_MODEL_RESOURCES"
LOG_LEVEL_ENV = "ASSESSMENT_MODEL_LOG_LEVEL"
CONFIG_FILENAME = "config.yaml"


class GlobalConfig(BaseModel):
    """Settings read from config.yaml."""

    resource_root: Path | None = None
    decode_policy: DecodePolicy = DecodePolicy.STRICT
    match_children: bool = False
    log_level: str = "WARNING"


def get_home() -> Path:
    """Directory holding config.yaml and the synced resources."""
    env_path = os.environ.get(HOME_ENV)
    if env_path:
        return Path(env_path)
    return Path.home() / ".config" / "assessment-model"


def get_config_path() -> Path:
    return get_home() / CONFIG_FILENAME


def get_resource_root() -> Path:
    """Default directory for synced resources."""
    return get_home() / "resources"


def load_global_config() -> GlobalConfig:
    """Load config.yaml and apply environment overrides.

    A missing file yields the defaults.

    Raises:
        ValueError: If the file is not a YAML mapping or holds invalid values.
    """
    config_path = get_config_path()
    data: dict = {}
    if config_path.exists():
        with open(config_path) as f:
            loaded = yaml.safe_load(f)
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"Config file must contain a mapping: {config_path}")
        data = loaded or {}

    env_resources = os.environ.get(RESOURCES_ENV)
    if env_resources:
        data["resource_root"] = env_resources
    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        data["log_level"] = env_level

    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {config_path}: {e}") from e


def write_global_config(config: GlobalConfig) -> Path:
    """Write config.yaml, creating the home directory if needed."""
    home = get_home()
    home.mkdir(parents=True, exist_ok=True)
    config_path = home / CONFIG_FILENAME
    data = config.model_dump(mode="json", exclude_none=True)
    with open(config_path, "w") as f:
        yaml.dump(data, f, sort_keys=False)
    return config_path


def log_level(config: GlobalConfig) -> int:
    """Numeric logging level for a config, WARNING if unrecognized."""
    level = logging.getLevelName(config.log_level.upper())
    return level if isinstance(level, int) else logging.WARNING

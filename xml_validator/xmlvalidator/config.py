"""Validator settings — YAML config file with environment overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from ruamel.yaml import YAML, YAMLError

from xmlvalidator.discovery import EXCLUDED_FILES
from xmlvalidator.validator.models import NoSchemaPolicy
from xmlvalidator.validator.urn_resolver import UrnResolver

logger = logging.getLogger(__name__)

VERSION = "0.1.0"
CONFIG_FILENAME = ".xmlvalidator.yaml"


class ConfigError(Exception):
    """The configuration file could not be read or is invalid."""


class ValidatorSettings(BaseModel):
    """Everything the pipeline needs to know about the project being checked."""

    project_root: Path = Field(default_factory=Path.cwd)
    components: dict[str, str] = Field(
        default_factory=dict, description="'vendor:component' -> schema root directory",
    )
    modules: dict[str, str] = Field(
        default_factory=dict, description="Module name -> module directory",
    )
    excluded_files: list[str] = Field(default_factory=lambda: list(EXCLUDED_FILES))
    no_schema_policy: NoSchemaPolicy = NoSchemaPolicy.valid
    ci_annotations: bool = False

    def build_urn_resolver(self) -> UrnResolver:
        return UrnResolver(self.project_root, self.components, self.modules)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() not in ("", "0", "false", "no")


def _read_yaml(config_path: Path) -> dict[str, Any]:
    yaml = YAML(typ="safe")
    try:
        data = yaml.load(config_path.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")
    return data


def load_settings(config_path: Path | None = None) -> ValidatorSettings:
    """Load settings from the config file (if any), then apply env overrides.

    The file is ``$XMLVALIDATOR_CONFIG`` or ``.xmlvalidator.yaml`` in the current
    directory. A relative ``project_root`` is taken relative to the file.
    """
    if config_path is None:
        env_path = os.environ.get("XMLVALIDATOR_CONFIG")
        config_path = Path(env_path) if env_path else Path.cwd() / CONFIG_FILENAME
        if env_path is None and not config_path.exists():
            config_path = None

    options: dict[str, Any] = {}
    base_dir = Path.cwd()
    if config_path is not None:
        options = _read_yaml(config_path)
        base_dir = config_path.resolve().parent
        logger.debug("Loaded settings from %s", config_path)

    extra_excluded = options.pop("excluded_files", None) or []
    options["excluded_files"] = list(EXCLUDED_FILES) + [
        name for name in extra_excluded if name not in EXCLUDED_FILES
    ]

    root = os.environ.get("XMLVALIDATOR_PROJECT_ROOT") or options.get("project_root")
    options["project_root"] = (base_dir / root).resolve() if root else base_dir.resolve()

    policy = os.environ.get("XMLVALIDATOR_NO_SCHEMA_POLICY")
    if policy:
        options["no_schema_policy"] = policy.strip().lower()

    options["ci_annotations"] = _env_flag("GITHUB_ACTIONS")

    try:
        return ValidatorSettings.model_validate(options)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e

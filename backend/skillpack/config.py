"""
Build Settings.

Layers build configuration from defaults, an optional skillpack.yaml file,
the BUILD_VERSION environment variable and explicit command-line values.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)


CONFIG_FILENAME = "skillpack.yaml"
VERSION_ENV_VAR = "BUILD_VERSION"

DEFAULT_OUTPUT_DIR = "dist"
MANIFEST_FILE = "plugin.json"
SKILLS_DIR = "skills"
DEFINITION_FILE = "SKILL.md"
RESOURCE_DIRS = ["resources"]


def _check_path_component(value: str, field_name: str) -> str:
    if not value or value in (".", "..") or "/" in value or "\\" in value:
        raise ValueError(f"{field_name} must be a single path component, got '{value}'")
    return value


class BuildSettings(BaseModel):
    """
    Settings for one packaging run.

    Attributes:
        root: Repository root containing plugin directories.
        output_dir: Directory receiving the archives.
        build_version: Version override; resolved from time and git when absent.
        manifest_file: File marking a directory as a plugin.
        skills_dir: Subdirectory of a plugin holding its skills.
        definition_file: File marking a directory as a skill.
        resource_dirs: Skill subdirectories copied into the archive when present.
        jobs: Number of archives built concurrently.
    """

    root: Path = Path(".")
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    build_version: Optional[str] = None
    manifest_file: str = MANIFEST_FILE
    skills_dir: str = SKILLS_DIR
    definition_file: str = DEFINITION_FILE
    resource_dirs: List[str] = Field(default_factory=lambda: list(RESOURCE_DIRS))
    jobs: int = Field(default=1, ge=1)

    @field_validator("build_version", mode="before")
    @classmethod
    def validate_build_version(cls, value: Any) -> Optional[str]:
        """Empty overrides count as absent; others must be safe file name parts."""
        if value is None:
            return None
        value = str(value)
        if not value:
            return None
        if any(ch.isspace() for ch in value):
            raise ValueError("build_version must not contain whitespace")
        return _check_path_component(value, "build_version")

    @field_validator("manifest_file", "skills_dir", "definition_file")
    @classmethod
    def validate_names(cls, value: str, info: ValidationInfo) -> str:
        return _check_path_component(value, info.field_name)

    @field_validator("resource_dirs")
    @classmethod
    def validate_resource_dirs(cls, value: List[str]) -> List[str]:
        for name in value:
            _check_path_component(name, "resource_dirs")
        return value

    @classmethod
    def load(
        cls,
        root: Optional[Path] = None,
        config_path: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "BuildSettings":
        """
        Build settings from all configuration layers.

        Args:
            root: Repository root (defaults to the current directory).
            config_path: Explicit YAML config file; must exist when given.
            env: Environment mapping consulted for BUILD_VERSION.
            **overrides: Explicit values; None entries are ignored.

        Returns:
            Validated BuildSettings.

        Raises:
            ConfigError: On unreadable or invalid configuration.
        """
        root = Path(root) if root is not None else Path(".")
        data: Dict[str, Any] = {"root": root}

        if config_path is not None:
            config_path = Path(config_path)
            if not config_path.is_file():
                raise ConfigError(f"Config file not found: {config_path}")
            data.update(load_config_file(config_path))
        else:
            default_path = root / CONFIG_FILENAME
            if default_path.is_file():
                data.update(load_config_file(default_path))
        data["root"] = root

        env_version = (env or {}).get(VERSION_ENV_VAR)
        if env_version:
            data["build_version"] = env_version

        data.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid build settings: {e}") from e


def load_config_file(path: Path) -> Dict[str, Any]:
    """Read the `build:` mapping from a YAML config file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if not isinstance(document, dict):
        raise ConfigError(f"{path} must contain a mapping")

    section = document.get("build", {}) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'build' in {path} must be a mapping")

    logger.debug("Loaded build settings from %s: %s", path, sorted(section))
    return dict(section)

"""
Exceptions raised by the skill packager.

Expected absences (a directory without a manifest, no git checkout) are
never errors. Everything defined here aborts the build.
"""

from __future__ import annotations

from typing import Optional


class SkillPackError(Exception):
    """Base class for all fatal packaging errors."""


class ConfigError(SkillPackError):
    """Invalid build settings or configuration file."""


class FrontmatterError(SkillPackError):
    """A skill definition header cannot be version-stamped."""


class OutputDirectoryError(SkillPackError):
    """The output directory cannot be created."""


class ArchiveBuildError(SkillPackError):
    """
    Building the archive for one plugin/skill pair failed.

    Attributes:
        plugin_name: Plugin that owns the failing skill.
        skill_name: Skill whose archive could not be built.
        cause: Underlying exception.
    """

    def __init__(
        self,
        plugin_name: str,
        skill_name: str,
        cause: Optional[BaseException] = None,
    ):
        self.plugin_name = plugin_name
        self.skill_name = skill_name
        self.cause = cause
        message = f"Failed to build {plugin_name}/{skill_name}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)

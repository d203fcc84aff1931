"""
Skill-Pack: versioned archive packaging for plugin skills.

Discovers skills in plugin directories, stamps the build version into each
SKILL.md frontmatter and writes one ZIP archive per skill.
"""

from .archive import ArchiveBuilder, archive_name, build_archive
from .config import BuildSettings
from .discovery import discover
from .errors import (
    ArchiveBuildError,
    ConfigError,
    FrontmatterError,
    OutputDirectoryError,
    SkillPackError,
)
from .frontmatter import SkillDocument, inject_version, parse_skill_md
from .models import BuildSummary, OutputArchive, PluginDirectory, SkillDirectory
from .pipeline import SkillPackager, build_skills
from .reporter import BuildReporter
from .version import resolve_version

__version__ = "1.0.0"
__all__ = [
    # Pipeline
    "SkillPackager",
    "build_skills",
    "BuildSettings",
    # Components
    "resolve_version",
    "discover",
    "inject_version",
    "parse_skill_md",
    "SkillDocument",
    "ArchiveBuilder",
    "archive_name",
    "build_archive",
    "BuildReporter",
    # Models
    "PluginDirectory",
    "SkillDirectory",
    "OutputArchive",
    "BuildSummary",
    # Errors
    "SkillPackError",
    "ConfigError",
    "FrontmatterError",
    "OutputDirectoryError",
    "ArchiveBuildError",
]

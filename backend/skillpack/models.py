"""
Data model for a packaging run.

Plugins and skills are discovered from the repository tree; each skill
produces exactly one OutputArchive per run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class PluginDirectory:
    """
    A directory holding a plugin manifest.

    Attributes:
        name: Plugin name (the directory name).
        path: Plugin directory path.
        manifest_path: Path to the manifest file inside the directory.
    """

    name: str
    path: Path
    manifest_path: Path


@dataclass(frozen=True)
class SkillDirectory:
    """
    A skill directory under a plugin's skills subdirectory.

    Attributes:
        name: Skill name (the directory name).
        path: Skill directory path.
        plugin: Owning plugin.
        definition_path: Path to the skill definition file.
        resource_paths: Auxiliary resource directories present in the skill.
    """

    name: str
    path: Path
    plugin: PluginDirectory
    definition_path: Path
    resource_paths: List[Path] = field(default_factory=list)

    @property
    def plugin_name(self) -> str:
        return self.plugin.name

    def read_definition(self) -> str:
        """Read the definition file, keeping line endings and undecodable bytes."""
        with open(
            self.definition_path, "r", encoding="utf-8", errors="surrogateescape", newline=""
        ) as f:
            return f.read()


@dataclass
class OutputArchive:
    """
    An archive produced for one skill.

    Attributes:
        plugin_name: Owning plugin.
        skill_name: Skill name, also the archive's top-level entry.
        version: Build version stamped into the definition.
        path: Location of the archive file.
        files: File entries stored in the archive.
        checksum: SHA256 prefix of the archive bytes.
    """

    plugin_name: str
    skill_name: str
    version: str
    path: Path
    files: List[str] = field(default_factory=list)
    checksum: Optional[str] = None

    @property
    def file_name(self) -> str:
        return self.path.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "plugin": self.plugin_name,
            "skill": self.skill_name,
            "version": self.version,
            "path": str(self.path),
            "files": self.files,
            "checksum": self.checksum,
        }


@dataclass
class BuildSummary:
    """Result of a complete packaging run."""

    version: str
    output_dir: Path
    archives: List[OutputArchive] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.archives)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "version": self.version,
            "output_dir": str(self.output_dir),
            "count": self.count,
            "archives": [a.to_dict() for a in self.archives],
        }

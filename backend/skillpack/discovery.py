"""
Plugin and skill discovery.

Walks a repository root for plugin directories (those holding a manifest)
and, beneath each plugin's skills directory, for skill directories (those
holding a definition file). Anything else is skipped without error.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple

from .config import DEFINITION_FILE, MANIFEST_FILE, RESOURCE_DIRS, SKILLS_DIR
from .models import PluginDirectory, SkillDirectory

logger = logging.getLogger(__name__)


def _subdirectories(path: Path) -> List[Path]:
    """Visible subdirectories of path in lexical order."""
    if not path.is_dir():
        return []
    return sorted(
        (p for p in path.iterdir() if p.is_dir() and not p.name.startswith(".")),
        key=lambda p: p.name,
    )


def discover_plugins(
    root: Path,
    manifest_file: str = MANIFEST_FILE,
) -> Iterator[PluginDirectory]:
    """Yield plugin directories directly under root."""
    for plugin_path in _subdirectories(Path(root)):
        manifest_path = plugin_path / manifest_file
        if not manifest_path.is_file():
            logger.debug("Skipping %s: no %s", plugin_path, manifest_file)
            continue
        yield PluginDirectory(
            name=plugin_path.name,
            path=plugin_path,
            manifest_path=manifest_path,
        )


def discover_skills(
    plugin: PluginDirectory,
    skills_dir: str = SKILLS_DIR,
    definition_file: str = DEFINITION_FILE,
    resource_dirs: Sequence[str] = tuple(RESOURCE_DIRS),
) -> Iterator[SkillDirectory]:
    """Yield skill directories of one plugin."""
    for skill_path in _subdirectories(plugin.path / skills_dir):
        definition_path = skill_path / definition_file
        if not definition_path.is_file():
            logger.debug("Skipping %s: no %s", skill_path, definition_file)
            continue
        yield SkillDirectory(
            name=skill_path.name,
            path=skill_path,
            plugin=plugin,
            definition_path=definition_path,
            resource_paths=[
                skill_path / name for name in resource_dirs
                if (skill_path / name).is_dir()
            ],
        )


def discover(
    root: Path,
    manifest_file: str = MANIFEST_FILE,
    skills_dir: str = SKILLS_DIR,
    definition_file: str = DEFINITION_FILE,
    resource_dirs: Sequence[str] = tuple(RESOURCE_DIRS),
) -> Iterator[Tuple[PluginDirectory, SkillDirectory]]:
    """
    Lazily enumerate (plugin, skill) pairs eligible for packaging.

    Plugins and skills are visited in lexical order of their directory
    names, so the same tree always yields the same sequence.

    Args:
        root: Repository root.
        manifest_file: File that marks a plugin directory.
        skills_dir: Skills subdirectory inside each plugin.
        definition_file: File that marks a skill directory.
        resource_dirs: Resource subdirectories recorded on each skill.

    Yields:
        (PluginDirectory, SkillDirectory) tuples.
    """
    for plugin in discover_plugins(root, manifest_file):
        for skill in discover_skills(plugin, skills_dir, definition_file, resource_dirs):
            yield plugin, skill

"""
Archive builder.

Stages a version-stamped copy of a skill in a temporary directory and zips
it so that the skill name is the archive's single top-level entry:

    skill-name/
    ├── SKILL.md    (version injected into frontmatter)
    └── resources/  (if present)
"""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import List

from .frontmatter import inject_version
from .models import OutputArchive, SkillDirectory

logger = logging.getLogger(__name__)

CHECKSUM_LENGTH = 16


def archive_name(plugin_name: str, skill_name: str, version: str) -> str:
    """File name of a skill archive: plugin.skill.VERSION.zip."""
    return f"{plugin_name}.{skill_name}.{version}.zip"


class ArchiveBuilder:
    """
    Builds one archive per skill into an output directory.

    The source skill directory is never modified. An existing archive with
    the same name is replaced.
    """

    def __init__(self, version: str, output_dir: Path):
        """Initialize with the run's build version and output directory."""
        self.version = version
        self.output_dir = Path(output_dir)

    def build(self, skill: SkillDirectory) -> OutputArchive:
        """
        Build the archive for a skill.

        Args:
            skill: Discovered skill directory.

        Returns:
            OutputArchive describing the written file.

        Raises:
            FrontmatterError: If the definition cannot be version-stamped.
            OSError: If staging or writing the archive fails.
        """
        output_path = self.output_dir / archive_name(
            skill.plugin_name, skill.name, self.version
        )

        with tempfile.TemporaryDirectory(prefix="skillpack-") as tmpdir:
            staging_root = Path(tmpdir)
            self._stage(skill, staging_root / skill.name)
            files = self._write_zip(staging_root, skill.name, output_path)

        return OutputArchive(
            plugin_name=skill.plugin_name,
            skill_name=skill.name,
            version=self.version,
            path=output_path,
            files=files,
            checksum=_archive_checksum(output_path),
        )

    def _stage(self, skill: SkillDirectory, staging_dir: Path) -> None:
        """Materialize the stamped definition and resources under staging_dir."""
        staging_dir.mkdir()
        logger.debug("Staging %s/%s in %s", skill.plugin_name, skill.name, staging_dir)

        stamped = inject_version(skill.read_definition(), self.version)
        definition_path = staging_dir / skill.definition_path.name
        with open(
            definition_path, "w", encoding="utf-8", errors="surrogateescape", newline=""
        ) as f:
            f.write(stamped)

        for resource_path in skill.resource_paths:
            shutil.copytree(resource_path, staging_dir / resource_path.name)

    @staticmethod
    def _write_zip(staging_root: Path, top_level: str, output_path: Path) -> List[str]:
        """
        Zip staging_root/top_level into output_path.

        The archive is written next to its destination and renamed into
        place, so a failed write never leaves a partial file under the
        final name.
        """
        source = staging_root / top_level
        entries = [source] + sorted(source.rglob("*"), key=lambda p: p.as_posix())
        files: List[str] = []

        partial_path = output_path.with_name(f".{output_path.name}.partial")
        try:
            with zipfile.ZipFile(partial_path, "w", zipfile.ZIP_DEFLATED) as zf:
                for entry in entries:
                    arcname = entry.relative_to(staging_root).as_posix()
                    zf.write(entry, arcname)
                    if entry.is_file():
                        files.append(arcname)
            os.replace(partial_path, output_path)
        except BaseException:
            partial_path.unlink(missing_ok=True)
            raise

        return files


def _archive_checksum(path: Path) -> str:
    """SHA256 prefix identifying the archive bytes."""
    return hashlib.sha256(path.read_bytes()).hexdigest()[:CHECKSUM_LENGTH]


def build_archive(skill: SkillDirectory, version: str, output_dir: Path) -> OutputArchive:
    """
    Convenience function to build one skill archive.

    Args:
        skill: Discovered skill directory.
        version: Build version for the run.
        output_dir: Existing directory receiving the archive.

    Returns:
        OutputArchive with archive metadata.
    """
    return ArchiveBuilder(version, output_dir).build(skill)

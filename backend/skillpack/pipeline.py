"""
Packaging pipeline.

Resolves the build version once, discovers (plugin, skill) pairs and
builds one archive per skill, stopping at the first failure.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from .archive import ArchiveBuilder
from .config import BuildSettings
from .discovery import discover
from .errors import ArchiveBuildError, ConfigError, FrontmatterError, OutputDirectoryError
from .models import BuildSummary, OutputArchive, PluginDirectory, SkillDirectory
from .reporter import BuildReporter
from .version import resolve_version

logger = logging.getLogger(__name__)


class SkillPackager:
    """
    Packages every discovered skill of a repository.

    Usage:
        packager = SkillPackager(BuildSettings.load(env=os.environ))
        summary = packager.run()
    """

    def __init__(
        self,
        settings: BuildSettings,
        reporter: Optional[BuildReporter] = None,
    ):
        self.settings = settings
        self.reporter = reporter or BuildReporter()

    def run(self) -> BuildSummary:
        """
        Run the full build.

        Returns:
            BuildSummary listing the archives in discovery order.

        Raises:
            ConfigError: If the root is not a directory.
            OutputDirectoryError: If the output directory cannot be created.
            ArchiveBuildError: If any skill fails to build.
        """
        settings = self.settings
        if not settings.root.is_dir():
            raise ConfigError(f"Root is not a directory: {settings.root}")

        version = resolve_version(settings.build_version, repo_dir=settings.root)
        self.reporter.build_started(version)

        try:
            settings.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(
                f"Cannot create output directory {settings.output_dir}: {e}"
            ) from e

        builder = ArchiveBuilder(version, settings.output_dir)
        pairs = discover(
            settings.root,
            manifest_file=settings.manifest_file,
            skills_dir=settings.skills_dir,
            definition_file=settings.definition_file,
            resource_dirs=settings.resource_dirs,
        )

        summary = BuildSummary(version=version, output_dir=settings.output_dir)
        for archive in self._build_all(builder, pairs):
            summary.archives.append(archive)
            self.reporter.archive_built(archive)

        logger.info("Built %d archives with version %s", summary.count, version)
        self.reporter.build_finished(summary)
        return summary

    def _build_all(
        self,
        builder: ArchiveBuilder,
        pairs: Iterable[Tuple[PluginDirectory, SkillDirectory]],
    ) -> Iterator[OutputArchive]:
        """Build archives in discovery order, in parallel when jobs > 1."""
        skills = (skill for _, skill in pairs)
        if self.settings.jobs == 1:
            for skill in skills:
                yield _build_one(builder, skill)
            return

        with ThreadPoolExecutor(max_workers=self.settings.jobs) as executor:
            yield from executor.map(lambda s: _build_one(builder, s), list(skills))


def _build_one(builder: ArchiveBuilder, skill: SkillDirectory) -> OutputArchive:
    try:
        return builder.build(skill)
    except (FrontmatterError, OSError, UnicodeError) as e:
        raise ArchiveBuildError(skill.plugin_name, skill.name, e) from e


def build_skills(
    root: Path,
    output_dir: Path,
    build_version: Optional[str] = None,
    reporter: Optional[BuildReporter] = None,
) -> List[OutputArchive]:
    """
    Convenience function to package all skills under root.

    Args:
        root: Repository root.
        output_dir: Directory receiving the archives.
        build_version: Optional version override.
        reporter: Progress reporter (stdout by default).

    Returns:
        Built archives in discovery order.
    """
    settings = BuildSettings(root=root, output_dir=output_dir, build_version=build_version)
    return SkillPackager(settings, reporter).run().archives

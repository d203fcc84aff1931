"""
Command line entry point.

Usage: skillpack [output_dir]
  output_dir: Directory for ZIP files (default: dist)

Environment variables:
  BUILD_VERSION: Version string to inject (e.g., "20251129-173045.a1b2c3d").
                 If not set, generated from the current UTC time and git SHA.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional

from .config import BuildSettings
from .errors import SkillPackError
from .pipeline import SkillPackager
from .reporter import BuildReporter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillpack",
        description="Build versioned skill ZIP archives from plugin directories",
    )
    parser.add_argument(
        "output_dir",
        nargs="?",
        type=Path,
        help="Output directory for ZIP files (default: dist)",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Repository root containing plugin directories (default: .)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML settings file (default: <root>/skillpack.yaml if present)",
    )
    parser.add_argument(
        "--build-version",
        help="Version to inject; overrides BUILD_VERSION",
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="Number of archives to build concurrently (default: 1)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = BuildSettings.load(
            root=args.root,
            config_path=args.config,
            env=os.environ,
            output_dir=args.output_dir,
            build_version=args.build_version,
            jobs=args.jobs,
        )
        SkillPackager(settings, BuildReporter(enabled=not args.quiet)).run()
    except SkillPackError as e:
        logger.error("%s", e)
        return 1
    return 0

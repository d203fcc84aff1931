"""
Build version resolution.

A build version is either an explicit override or a UTC timestamp,
suffixed with the short git revision when the root is a git checkout.
"""

from __future__ import annotations

import logging
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
REVISION_LENGTH = 7


def resolve_version(
    override: Optional[str] = None,
    repo_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Resolve the version string for one build run.

    Args:
        override: Explicit version; returned verbatim when non-empty.
        repo_dir: Directory used for the git revision lookup.
        now: Clock value to use instead of the current UTC time.

    Returns:
        "{timestamp}.{revision}", or "{timestamp}" outside a git checkout.
    """
    if override:
        logger.debug("Using build version override %s", override)
        return override

    timestamp = format_timestamp(now or datetime.now(timezone.utc))
    revision = _get_git_revision(repo_dir)
    if revision:
        return f"{timestamp}.{revision}"

    logger.debug("No git revision available, using timestamp only")
    return timestamp


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as a sortable UTC timestamp (YYYYMMDD-HHMMSS)."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


def _get_git_revision(repo_dir: Optional[Path] = None) -> Optional[str]:
    """Get the short HEAD revision if repo_dir is inside a git checkout."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", f"--short={REVISION_LENGTH}", "HEAD"],
            cwd=str(repo_dir) if repo_dir is not None else None,
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            return result.stdout.strip() or None
    except (subprocess.SubprocessError, OSError):
        pass
    return None

"""
Tests for build version resolution.
"""

import subprocess
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

from backend.skillpack.version import (
    REVISION_LENGTH,
    _get_git_revision,
    format_timestamp,
    resolve_version,
)


NOW = datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


class TestResolveVersion:
    """Tests for resolve_version."""

    def test_override_returned_verbatim(self):
        """Test that an override bypasses time and git."""
        with patch("backend.skillpack.version._get_git_revision") as mock_git:
            assert resolve_version("20250101-000000.abc1234") == "20250101-000000.abc1234"
            mock_git.assert_not_called()

    def test_empty_override_ignored(self):
        """Test that an empty override falls back to the timestamp."""
        with patch("backend.skillpack.version._get_git_revision", return_value=None):
            assert resolve_version("", now=NOW) == "20250101-000000"

    def test_timestamp_with_revision(self):
        """Test timestamp plus short revision."""
        with patch("backend.skillpack.version._get_git_revision", return_value="abc1234"):
            assert resolve_version(now=NOW) == "20250101-000000.abc1234"

    def test_timestamp_without_git(self):
        """Test timestamp alone when git is unavailable."""
        with patch("backend.skillpack.version._get_git_revision", return_value=None):
            assert resolve_version(now=NOW) == "20250101-000000"

    def test_no_slash_in_computed_version(self):
        """Test that computed versions are safe file name parts."""
        version = resolve_version()
        assert "/" not in version

    def test_repo_dir_passed_to_git(self):
        """Test that the revision is looked up in repo_dir."""
        with patch("backend.skillpack.version._get_git_revision", return_value=None) as mock_git:
            resolve_version(repo_dir="/some/repo", now=NOW)
            mock_git.assert_called_once_with("/some/repo")


class TestFormatTimestamp:
    """Tests for format_timestamp."""

    def test_fixed_width(self):
        """Test the YYYYMMDD-HHMMSS layout."""
        assert format_timestamp(datetime(2025, 11, 29, 17, 30, 45)) == "20251129-173045"

    def test_converts_to_utc(self):
        """Test that aware datetimes are converted to UTC."""
        tz = timezone(timedelta(hours=2))
        moment = datetime(2025, 1, 1, 2, 0, 0, tzinfo=tz)
        assert format_timestamp(moment) == "20250101-000000"

    def test_lexically_sortable(self):
        """Test that later times sort later."""
        earlier = format_timestamp(datetime(2025, 1, 9, 23, 59, 59))
        later = format_timestamp(datetime(2025, 1, 10, 0, 0, 0))
        assert earlier < later


class TestGetGitRevision:
    """Tests for the git revision lookup."""

    def test_success(self):
        """Test a successful rev-parse."""
        completed = MagicMock(returncode=0, stdout="abc1234\n")
        with patch("backend.skillpack.version.subprocess.run", return_value=completed) as mock_run:
            assert _get_git_revision() == "abc1234"
            command = mock_run.call_args[0][0]
            assert command == ["git", "rev-parse", f"--short={REVISION_LENGTH}", "HEAD"]

    def test_not_a_repository(self):
        """Test a non-zero exit status."""
        completed = MagicMock(returncode=128, stdout="")
        with patch("backend.skillpack.version.subprocess.run", return_value=completed):
            assert _get_git_revision() is None

    def test_git_not_installed(self):
        """Test a missing git executable."""
        with patch("backend.skillpack.version.subprocess.run", side_effect=FileNotFoundError):
            assert _get_git_revision() is None

    def test_timeout(self):
        """Test a hanging git process."""
        error = subprocess.TimeoutExpired(cmd="git", timeout=5)
        with patch("backend.skillpack.version.subprocess.run", side_effect=error):
            assert _get_git_revision() is None

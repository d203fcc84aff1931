"""
Build progress reporter.

Purely observational: disabling it or redirecting its stream never
changes what gets built.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .models import BuildSummary, OutputArchive


class BuildReporter:
    """Prints one line per built archive and a final summary line."""

    def __init__(self, stream: Optional[TextIO] = None, enabled: bool = True):
        self.stream = stream
        self.enabled = enabled

    def _emit(self, line: str) -> None:
        if not self.enabled:
            return
        stream = self.stream if self.stream is not None else sys.stdout
        print(line, file=stream, flush=True)

    def build_started(self, version: str) -> None:
        self._emit(f"Build version: {version}")

    def archive_built(self, archive: OutputArchive) -> None:
        self._emit(f"Built: {archive.file_name}")

    def build_finished(self, summary: BuildSummary) -> None:
        output_dir = summary.output_dir.as_posix().rstrip("/")
        self._emit(f"Done. Built {summary.count} skill ZIPs in {output_dir}/")

"""
SKILL.md frontmatter handling.

A skill definition starts with a header of `key: value` lines, normally
delimited by `---` lines, followed by free-form markdown. Without
delimiters the header is the leading run of `key: value` lines up to the
first blank line. The header is parsed into a small
line model so that fields can be inserted without disturbing any other
line, including its line ending.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import FrontmatterError


DELIMITER = "---"
NAME_FIELD = "name"
VERSION_FIELD = "version"

# Top-level keys only; indented lines belong to the previous value.
_KEY_PATTERN = re.compile(r"^([A-Za-z0-9_][A-Za-z0-9_.-]*)\s*:")


def _line_ending(line: str) -> str:
    return line[len(line.rstrip("\r\n")):]


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == DELIMITER


@dataclass
class HeaderLine:
    """A raw header line and the top-level key it declares, if any."""

    text: str
    key: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "HeaderLine":
        match = _KEY_PATTERN.match(text)
        return cls(text=text, key=match.group(1) if match else None)


@dataclass
class SkillDocument:
    """
    A skill definition split into header lines and body.

    Attributes:
        opening: Opening delimiter line, empty for an undelimited header.
        header: Lines between the delimiters.
        closing: Closing delimiter line, empty for an undelimited header.
        body: Everything after the closing delimiter, verbatim.
    """

    opening: str
    closing: str
    header: List[HeaderLine] = field(default_factory=list)
    body: str = ""

    def keys(self) -> List[str]:
        """Top-level header keys in order."""
        return [line.key for line in self.header if line.key]

    def find_field(self, key: str) -> Optional[int]:
        """Index of the header line declaring key, or None."""
        for index, line in enumerate(self.header):
            if line.key == key:
                return index
        return None

    def insert_field_after(self, anchor: str, key: str, value: str) -> None:
        """
        Insert `key: value` directly after the line declaring anchor.

        Raises:
            FrontmatterError: If anchor is missing or key already exists.
        """
        index = self.find_field(anchor)
        if index is None:
            raise FrontmatterError(f"Frontmatter has no '{anchor}' field")
        if self.find_field(key) is not None:
            raise FrontmatterError(f"Frontmatter already declares '{key}'")

        anchor_line = self.header[index]
        ending = _line_ending(anchor_line.text)
        if ending:
            new_text = f"{key}: {value}{ending}"
        else:
            # Anchor is the last line of the file.
            anchor_line.text += "\n"
            new_text = f"{key}: {value}"
        self.header.insert(index + 1, HeaderLine(text=new_text, key=key))

    def serialize(self) -> str:
        """Render the document back to text."""
        return "".join(
            [self.opening]
            + [line.text for line in self.header]
            + [self.closing, self.body]
        )


def parse_skill_md(text: str) -> SkillDocument:
    """
    Split a skill definition into its header line model and body.

    Args:
        text: Full SKILL.md content.

    Returns:
        SkillDocument that serializes back to exactly text.

    Raises:
        FrontmatterError: If there is no header or a `---` header is
            never closed.
    """
    lines = text.splitlines(keepends=True)
    if not lines:
        raise FrontmatterError("Missing frontmatter block (--- ... ---)")
    if not _is_delimiter(lines[0]):
        return _parse_undelimited(lines)

    for index in range(1, len(lines)):
        if _is_delimiter(lines[index]):
            return SkillDocument(
                opening=lines[0],
                closing=lines[index],
                header=[HeaderLine.parse(line) for line in lines[1:index]],
                body="".join(lines[index + 1:]),
            )

    raise FrontmatterError("Frontmatter block is not closed with ---")


def _parse_undelimited(lines: List[str]) -> SkillDocument:
    """Header is the leading run of `key: value` lines and their continuations."""
    end = 0
    for line in lines:
        if not line.strip():
            break
        is_key = _KEY_PATTERN.match(line) is not None
        is_continuation = end > 0 and line[0] in " \t"
        if not (is_key or is_continuation):
            break
        end += 1

    if end == 0:
        raise FrontmatterError("Missing frontmatter block (--- ... ---)")

    return SkillDocument(
        opening="",
        closing="",
        header=[HeaderLine.parse(line) for line in lines[:end]],
        body="".join(lines[end:]),
    )


def inject_version(text: str, version: str) -> str:
    """
    Return text with `version: <version>` inserted after the name field.

    All other lines pass through unchanged and in order.

    Raises:
        FrontmatterError: If the header is malformed, has no name field,
            or already declares a version.
    """
    if not version:
        raise FrontmatterError("Cannot inject an empty version")
    document = parse_skill_md(text)
    document.insert_field_after(NAME_FIELD, VERSION_FIELD, version)
    return document.serialize()

"""Go coverage adapter — parse ``go test -coverprofile`` output.

Parses the standard Go cover profile format (mode + file:line.column,line.column
numStmts count) into one ``Profile`` per source file.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from typing import TYPE_CHECKING, TextIO

from gocobertura.adapters.coverage.base import Profile, ProfileBlock
from gocobertura.errors import ParseError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────

_MODE_PREFIX = "mode: "
_SET_MODE = "set"

# Cover profile: "file:startLine.startCol,endLine.endCol numStmts count"
_COVER_LINE_REGEX = re.compile(r"^(.+):(\d+)\.(\d+),(\d+)\.(\d+) (\d+) (\d+)$")


# ── Parsing ──────────────────────────────────────────────────────


def parse_profiles(text: str) -> dict[str, Profile]:
    """Parse cover profile text into profiles keyed by file name.

    Files keep the order of their first record; blocks inside a file are
    sorted by start position and blocks with identical ranges are merged.

    Raises:
        ParseError: If the mode line or any record line is malformed.
    """
    lines = text.splitlines()
    mode = _parse_mode_line(lines[0].rstrip() if lines else "")

    files: dict[str, Profile] = {}
    for raw_line in lines[1:]:
        line = raw_line.rstrip()
        if not line:
            continue
        block = _parse_block_line(line)
        profile = files.get(block.file_name)
        if profile is None:
            profile = Profile(file_name=block.file_name, mode=mode)
            files[block.file_name] = profile
        profile.blocks.append(block)

    for profile in files.values():
        profile.blocks = _merge_blocks(profile.blocks, mode)

    logger.debug("Parsed %d profile(s) in mode %r", len(files), mode)
    return files


def _parse_mode_line(line: str) -> str:
    if not line.startswith(_MODE_PREFIX) or line == _MODE_PREFIX:
        raise ParseError(f"bad mode line: {line}")
    return line[len(_MODE_PREFIX) :]


def _parse_block_line(line: str) -> ProfileBlock:
    match = _COVER_LINE_REGEX.match(line)
    if not match:
        raise ParseError(f'line "{line}" doesn\'t match expected format')
    file_name, start_line, start_col, end_line, end_col, num_stmt, count = match.groups()
    return ProfileBlock(
        file_name=file_name,
        start_line=int(start_line),
        start_col=int(start_col),
        end_line=int(end_line),
        end_col=int(end_col),
        num_stmt=int(num_stmt),
        count=int(count),
    )


def _merge_blocks(blocks: list[ProfileBlock], mode: str) -> list[ProfileBlock]:
    """Sort blocks by start position and fold duplicate ranges together."""
    ordered = sorted(blocks, key=lambda b: (b.start_line, b.start_col))
    merged: list[ProfileBlock] = []
    for block in ordered:
        if merged and merged[-1].same_range(block):
            last = merged[-1]
            if block.num_stmt != last.num_stmt:
                raise ParseError(
                    f"inconsistent NumStmt: changed from {last.num_stmt} to {block.num_stmt}"
                )
            count = last.count | block.count if mode == _SET_MODE else last.count + block.count
            merged[-1] = dataclasses.replace(last, count=count)
            continue
        merged.append(block)
    return merged


# ── Adapter ──────────────────────────────────────────────────────


class GoCoverAdapter:
    """Reads Go cover profiles from streams or files."""

    @property
    def name(self) -> str:
        return "go_cover"

    @property
    def language(self) -> str:
        return "go"

    def parse(self, stream: TextIO) -> dict[str, Profile]:
        """Parse a cover profile from an open text stream."""
        return parse_profiles(stream.read())

    def parse_coverage_file(self, coverage_file: Path) -> dict[str, Profile]:
        """Parse a Go cover profile file.

        Format: first line "mode: set", "mode: count" or "mode: atomic",
        then one line per block:
        file:startLine.startCol,endLine.endCol numStmts count
        """
        return parse_profiles(coverage_file.read_text(encoding="utf-8"))

"""Data models for parsed Go coverage profiles."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProfileBlock:
    """One statement block of a cover profile record.

    Lines and columns are 1-based, as written by ``go test -coverprofile``.
    """

    file_name: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    num_stmt: int
    count: int

    def same_range(self, other: ProfileBlock) -> bool:
        """Return True if *other* covers exactly the same source range."""
        return (
            self.start_line == other.start_line
            and self.start_col == other.start_col
            and self.end_line == other.end_line
            and self.end_col == other.end_col
        )


@dataclass
class Profile:
    """All blocks recorded for one source file, sorted by start position."""

    file_name: str
    mode: str
    blocks: list[ProfileBlock] = field(default_factory=list)

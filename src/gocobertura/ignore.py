"""Rules for dropping source files from the coverage report."""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# https://go.dev/s/generatedcode
DEFAULT_GENERATED_MARKER = r"^// Code generated .* DO NOT EDIT\.$"


@dataclass(frozen=True)
class Ignore:
    """Decides whether a file's coverage is left out of the report.

    A default instance ignores nothing. Instances only hold read-only
    configuration and can be shared between conversions.
    """

    files: re.Pattern[str] | None = None
    """Files whose module-relative path matches are ignored."""

    dirs: re.Pattern[str] | None = None
    """Files whose module-relative directory matches are ignored."""

    generated_files: bool = False
    """Ignore files whose content carries the generated-code marker."""

    generated_marker: re.Pattern[bytes] = re.compile(
        DEFAULT_GENERATED_MARKER.encode(), re.MULTILINE
    )
    """Multiline pattern searched for in file content."""

    @classmethod
    def from_patterns(
        cls,
        *,
        files: str | None = None,
        dirs: str | None = None,
        generated_files: bool = False,
        generated_marker: str | None = None,
    ) -> Ignore:
        """Build an ``Ignore`` from regular expression strings.

        Raises:
            re.error: If any pattern does not compile.
        """
        marker = generated_marker or DEFAULT_GENERATED_MARKER
        return cls(
            files=re.compile(files) if files else None,
            dirs=re.compile(dirs) if dirs else None,
            generated_files=generated_files,
            generated_marker=re.compile(marker.encode(), re.MULTILINE),
        )

    def should_ignore_file(self, path: str) -> bool:
        """Return True if *path* is excluded by the file or directory pattern."""
        if self.files is not None and self.files.search(path):
            logger.debug("Ignoring %s (file pattern)", path)
            return True
        if self.dirs is not None and self.dirs.search(posixpath.dirname(path.replace("\\", "/"))):
            logger.debug("Ignoring %s (directory pattern)", path)
            return True
        return False

    def is_generated(self, data: bytes) -> bool:
        """Return True if generated files are ignored and *data* is generated."""
        return self.generated_files and self.generated_marker.search(data) is not None

    def match(self, path: str, data: bytes) -> bool:
        """Return True if the file at *path* with content *data* is ignored."""
        return self.should_ignore_file(path) or self.is_generated(data)

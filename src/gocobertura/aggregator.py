"""Build the Cobertura document from parsed cover profiles.

Each retained source file becomes one class. Its lines are the union of the
lines spanned by the file's profile blocks, and its methods are the Go
function and method declarations found in the file. Packages group classes
by Go import path.
"""

from __future__ import annotations

import logging
import ntpath
import posixpath
from pathlib import Path
from typing import TYPE_CHECKING

from gocobertura.errors import ResolutionError, SourceReadError
from gocobertura.ignore import Ignore
from gocobertura.models.coverage import NO_CLASS_NAME, Class, Coverage, Line, Method, Package
from gocobertura.parsing import scan_declarations

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from gocobertura.adapters.coverage.base import Profile, ProfileBlock
    from gocobertura.adapters.packages.base import PackageInfo
    from gocobertura.parsing.treesitter import FunctionInfo

    SourceReader = Callable[[str], bytes]
    DeclarationScanner = Callable[[bytes], list[FunctionInfo]]

logger = logging.getLogger(__name__)

MODULE_REQUIRED_MESSAGE = "package required when using go modules"


def read_source(path: str) -> bytes:
    """Read a source file from disk."""
    return Path(path).read_bytes()


def package_import_path(file_name: str) -> str:
    """Return the import path of the package holding *file_name*."""
    return posixpath.dirname(file_name.replace("\\", "/")).rstrip("/")


def merge_block_lines(blocks: list[ProfileBlock]) -> list[Line]:
    """Expand blocks to per-line hit counts in ascending line order.

    A line spanned by several blocks keeps the highest hit count.
    """
    hits: dict[int, int] = {}
    for block in blocks:
        for number in range(block.start_line, block.end_line + 1):
            hits[number] = max(hits.get(number, 0), block.count)
    return [Line(number=number, hits=hits[number]) for number in sorted(hits)]


def class_name_for(declarations: list[FunctionInfo]) -> str:
    """Return the single receiver type declared in a file, or ``-``."""
    receivers = list(dict.fromkeys(decl.receiver for decl in declarations if decl.receiver))
    if len(receivers) == 1:
        return receivers[0]
    return NO_CLASS_NAME


def _relative_file_name(file_name: str, module_path: str) -> str:
    prefix = module_path.rstrip("/") + "/"
    if module_path and file_name.startswith(prefix):
        return file_name[len(prefix) :]
    return file_name


def _find_abs_file_path(pkg: PackageInfo, file_name: str) -> str:
    """Locate the profile's file among the package's sources by base name."""
    base_name = posixpath.basename(file_name.replace("\\", "/"))
    for full_path in pkg.go_files:
        if ntpath.basename(full_path) == base_name:
            return full_path
    return file_name


class CoverageAggregator:
    """Accumulates profiles into packages, classes, methods and lines.

    Args:
        packages: Resolved package metadata keyed by import path.
        ignore: Filter deciding which files are left out.
        reader: Reads a source file's bytes given its path.
        scanner: Returns the declarations found in Go source bytes.
    """

    def __init__(
        self,
        packages: Mapping[str, PackageInfo] | None,
        ignore: Ignore | None = None,
        *,
        reader: SourceReader = read_source,
        scanner: DeclarationScanner = scan_declarations,
    ) -> None:
        self._packages = packages
        self._ignore = ignore or Ignore()
        self._reader = reader
        self._scanner = scanner
        self._sources: list[str] = []
        self._package_records: dict[str, Package] = {}

    def add_profiles(self, profiles: Mapping[str, Profile]) -> None:
        for profile in profiles.values():
            self.add_profile(profile)

    def add_profile(self, profile: Profile) -> Class | None:
        """Add one file's blocks; return its class, or None if it was ignored.

        Raises:
            ResolutionError: If no module metadata exists for the file.
            SourceReadError: If the source file cannot be read.
        """
        pkg = self._lookup_package(profile.file_name)
        if pkg is None or pkg.module is None:
            raise ResolutionError(MODULE_REQUIRED_MESSAGE)

        if pkg.module.dir and pkg.module.dir not in self._sources:
            self._sources.append(pkg.module.dir)

        file_name = _relative_file_name(profile.file_name, pkg.module.path)
        if self._ignore.should_ignore_file(file_name):
            return None

        abs_path = _find_abs_file_path(pkg, profile.file_name)
        try:
            data = self._reader(abs_path)
        except OSError as exc:
            raise SourceReadError(str(exc)) from exc

        if self._ignore.is_generated(data):
            logger.debug("Ignoring generated file %s", file_name)
            return None

        cls = self._build_class(profile, file_name, data)
        package_name = (pkg.id or package_import_path(profile.file_name)).rstrip("/\\")
        record = self._package_records.get(package_name)
        if record is None:
            record = Package(name=package_name)
            self._package_records[package_name] = record
        record.classes.append(cls)
        logger.debug("Added %s to package %s (%d lines)", file_name, package_name, len(cls.lines))
        return cls

    def build(self, *, timestamp: int = 0, version: str = "") -> Coverage:
        """Return the finished document; packages without classes are omitted."""
        return Coverage(
            sources=list(self._sources),
            packages=[pkg for pkg in self._package_records.values() if pkg.classes],
            timestamp=timestamp,
            version=version,
        )

    def _lookup_package(self, file_name: str) -> PackageInfo | None:
        if not self._packages:
            return None
        return self._packages.get(package_import_path(file_name))

    def _build_class(self, profile: Profile, file_name: str, data: bytes) -> Class:
        lines = merge_block_lines(profile.blocks)
        declarations = self._scanner(data)
        methods = [
            Method(
                name=decl.name,
                lines=[line for line in lines if decl.contains(line.number)],
            )
            for decl in declarations
        ]
        return Class(
            name=class_name_for(declarations),
            filename=file_name,
            methods=methods,
            lines=lines,
        )

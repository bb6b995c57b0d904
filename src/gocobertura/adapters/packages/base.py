"""Package resolver interface and the metadata it returns."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass
class ModuleInfo:
    """The Go module a package belongs to."""

    path: str
    """Module import path (e.g. ``github.com/user/repo``)."""

    dir: str = ""
    """Directory holding the module's ``go.mod``."""


@dataclass
class PackageInfo:
    """Metadata for one Go package."""

    id: str
    """Package import path."""

    name: str = ""
    """Declared package name."""

    go_files: list[str] = field(default_factory=list)
    """Absolute paths of the package's Go source files."""

    module: ModuleInfo | None = None
    """Owning module, None outside module mode."""


class PackageResolver(ABC):
    """Maps Go import paths to package metadata."""

    @abstractmethod
    def resolve(self, import_paths: Sequence[str]) -> dict[str, PackageInfo]:
        """Resolve *import_paths* to packages keyed by import path.

        Packages that cannot be found are left out of the result; the caller
        decides whether a missing package is an error.
        """

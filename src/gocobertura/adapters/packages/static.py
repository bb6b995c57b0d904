"""Resolver backed by pre-computed package metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gocobertura.adapters.packages.base import PackageInfo, PackageResolver

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


class StaticResolver(PackageResolver):
    """Serves packages from a fixed collection."""

    def __init__(self, packages: Iterable[PackageInfo] = ()) -> None:
        self._packages = {pkg.id: pkg for pkg in packages}

    def resolve(self, import_paths: Sequence[str]) -> dict[str, PackageInfo]:
        return {path: self._packages[path] for path in import_paths if path in self._packages}

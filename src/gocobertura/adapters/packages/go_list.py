"""Resolve Go packages by running ``go list -json``."""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
from typing import TYPE_CHECKING, Any

from gocobertura.adapters.packages.base import ModuleInfo, PackageInfo, PackageResolver
from gocobertura.errors import ResolutionError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


def _go_executable() -> str:
    """Resolve the full path to the ``go`` executable."""
    return shutil.which("go") or "go"


def iter_json_objects(text: str) -> Iterator[dict[str, Any]]:
    """Yield each JSON object from ``go list -json`` output.

    ``go list`` prints one object per package back to back, without a
    surrounding array or separators.
    """
    decoder = json.JSONDecoder()
    pos = 0
    end = len(text)
    while True:
        while pos < end and text[pos].isspace():
            pos += 1
        if pos >= end:
            return
        obj, pos = decoder.raw_decode(text, pos)
        if isinstance(obj, dict):
            yield obj


def package_from_json(data: dict[str, Any]) -> PackageInfo:
    """Build a ``PackageInfo`` from one ``go list -json`` object."""
    pkg_dir = data.get("Dir", "")
    module_data = data.get("Module")
    module = None
    if isinstance(module_data, dict) and module_data.get("Path"):
        module = ModuleInfo(path=module_data["Path"], dir=module_data.get("Dir", ""))
    return PackageInfo(
        id=data.get("ImportPath", ""),
        name=data.get("Name", ""),
        go_files=[os.path.join(pkg_dir, name) for name in data.get("GoFiles") or []],
        module=module,
    )


class GoListResolver(PackageResolver):
    """Package resolver using the ``go`` command of the current toolchain.

    Args:
        cwd: Directory to run ``go list`` in, normally the module root.
        timeout: Maximum seconds to wait for ``go list``.
    """

    def __init__(self, cwd: Path | None = None, timeout: float = 120.0) -> None:
        self._cwd = cwd
        self._timeout = timeout

    def resolve(self, import_paths: Sequence[str]) -> dict[str, PackageInfo]:
        """Run ``go list -e -json`` once for all *import_paths*.

        Raises:
            ResolutionError: If the go command is missing or fails.
        """
        if not import_paths:
            return {}
        cmd = [_go_executable(), "list", "-e", "-json", *dict.fromkeys(import_paths)]
        try:
            result = subprocess.run(
                cmd,
                cwd=self._cwd,
                capture_output=True,
                text=True,
                check=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise ResolutionError(f"go not found: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            raise ResolutionError(f"go list timed out after {self._timeout:.1f}s") from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise ResolutionError(f"go list failed: {stderr or exc}") from exc

        try:
            packages = [package_from_json(obj) for obj in iter_json_objects(result.stdout)]
        except json.JSONDecodeError as exc:
            raise ResolutionError(f"unexpected go list output: {exc}") from exc

        logger.debug("go list resolved %d package(s)", len(packages))
        return {pkg.id: pkg for pkg in packages if pkg.id}

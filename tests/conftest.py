"""Shared fixtures for the gocobertura test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from gocobertura.adapters.packages import ModuleInfo, PackageInfo, StaticResolver

TESTDATA_DIR = Path(__file__).parent / "testdata"
TESTDATA_MODULE = "example.com/cover"
TESTDATA_PACKAGE = f"{TESTDATA_MODULE}/testdata"


@pytest.fixture
def testdata_dir() -> Path:
    return TESTDATA_DIR


@pytest.fixture
def testdata_package() -> PackageInfo:
    """Package metadata for the Go sources under ``tests/testdata``."""
    return PackageInfo(
        id=TESTDATA_PACKAGE,
        name="testdata",
        go_files=[str(path) for path in sorted(TESTDATA_DIR.glob("*.go"))],
        module=ModuleInfo(path=TESTDATA_MODULE, dir=str(TESTDATA_DIR.parent)),
    )


@pytest.fixture
def testdata_resolver(testdata_package: PackageInfo) -> StaticResolver:
    return StaticResolver([testdata_package])


@pytest.fixture
def testdata_profile() -> str:
    return (TESTDATA_DIR / "testdata_set.txt").read_text(encoding="utf-8")

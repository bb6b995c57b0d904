"""Tests for the Ignore filter (ignore.py)."""

from __future__ import annotations

import re

import pytest

from gocobertura.ignore import DEFAULT_GENERATED_MARKER, Ignore

_GENERATED = b"// Code generated by protoc-gen-go. DO NOT EDIT.\n\npackage pb\n"
_HANDWRITTEN = b"package pb\n\nfunc Foo() {}\n"


class TestDefaultIgnore:
    def test_ignores_nothing(self) -> None:
        ignore = Ignore()
        assert ignore.should_ignore_file("testdata/func1.go") is False
        assert ignore.is_generated(_GENERATED) is False
        assert ignore.match("testdata/func1.go", _GENERATED) is False


class TestFilePattern:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("testdata/func4.go", True),
            ("testdata/func5.go", True),
            ("testdata\\func4.go", True),
            ("testdata/func1.go", False),
            ("func4.go", False),
        ],
    )
    def test_regex_match(self, path: str, expected: bool) -> None:
        ignore = Ignore(files=re.compile(r"[\\/]func[45]\.go$"))
        assert ignore.should_ignore_file(path) is expected

    def test_pattern_searches_anywhere(self) -> None:
        ignore = Ignore(files=re.compile(r"_mock"))
        assert ignore.should_ignore_file("internal/store_mock.go") is True


class TestDirPattern:
    def test_matches_directory_only(self) -> None:
        ignore = Ignore(dirs=re.compile(r"^vendor"))
        assert ignore.should_ignore_file("vendor/lib/a.go") is True
        assert ignore.should_ignore_file("cmd/vendor.go") is False

    def test_backslash_paths(self) -> None:
        ignore = Ignore(dirs=re.compile(r"mocks$"))
        assert ignore.should_ignore_file("internal\\mocks\\db.go") is True


class TestGeneratedFiles:
    def test_flag_off_keeps_generated(self) -> None:
        assert Ignore(generated_files=False).is_generated(_GENERATED) is False

    def test_flag_on_drops_generated(self) -> None:
        assert Ignore(generated_files=True).is_generated(_GENERATED) is True

    def test_flag_on_keeps_handwritten(self) -> None:
        assert Ignore(generated_files=True).is_generated(_HANDWRITTEN) is False

    def test_marker_must_be_whole_line(self) -> None:
        data = b"package a\n\n// See: Code generated files DO NOT EDIT.\n"
        assert Ignore(generated_files=True).is_generated(data) is False

    def test_marker_after_other_comments(self) -> None:
        data = b"// Copyright 2024\n\n// Code generated by mockgen. DO NOT EDIT.\npackage a\n"
        assert Ignore(generated_files=True).is_generated(data) is True

    def test_custom_marker(self) -> None:
        ignore = Ignore.from_patterns(generated_files=True, generated_marker=r"^// @generated$")
        assert ignore.is_generated(b"// @generated\npackage a\n") is True
        assert ignore.is_generated(_GENERATED) is False


class TestFromPatterns:
    def test_empty_patterns_ignore_nothing(self) -> None:
        ignore = Ignore.from_patterns(files="", dirs=None)
        assert ignore.files is None
        assert ignore.dirs is None

    def test_default_marker(self) -> None:
        ignore = Ignore.from_patterns(generated_files=True)
        assert ignore.generated_marker.pattern == DEFAULT_GENERATED_MARKER.encode()

    def test_invalid_pattern_raises(self) -> None:
        with pytest.raises(re.error):
            Ignore.from_patterns(files="(unclosed")

    def test_match_combines_rules(self) -> None:
        ignore = Ignore.from_patterns(files=r"_test\.go$", generated_files=True)
        assert ignore.match("a_test.go", _HANDWRITTEN) is True
        assert ignore.match("a.go", _GENERATED) is True
        assert ignore.match("a.go", _HANDWRITTEN) is False

"""Tests for the Go cover profile parser (adapters/coverage/go_cover_adapter.py).

Covers mode line handling, record parsing, block ordering and merging.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from gocobertura.adapters.coverage.go_cover_adapter import GoCoverAdapter, parse_profiles
from gocobertura.errors import ParseError


def _write_file(root: Path, rel: str, content: str) -> Path:
    f = root / rel
    f.parent.mkdir(parents=True, exist_ok=True)
    f.write_text(content, encoding="utf-8")
    return f


# ── Sample cover profile ────────────────────────────────────────

_GO_COVER_PROFILE = """\
mode: set
example.com/mypkg/foo.go:5.2,7.4 2 1
example.com/mypkg/foo.go:10.1,12.3 3 0
example.com/mypkg/bar.go:1.1,3.2 2 2
"""


class TestGoCoverAdapterIdentity:
    def test_name(self) -> None:
        assert GoCoverAdapter().name == "go_cover"

    def test_language(self) -> None:
        assert GoCoverAdapter().language == "go"


class TestModeLine:
    def test_invalid_data(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_profiles("invalid data")
        assert str(exc_info.value) == "bad mode line: invalid data"

    def test_mode_prefix_without_mode(self) -> None:
        with pytest.raises(ParseError, match="bad mode line"):
            parse_profiles("mode: \nexample.com/pkg/a.go:1.1,2.2 1 1\n")

    def test_empty_input(self) -> None:
        with pytest.raises(ParseError, match="bad mode line"):
            parse_profiles("")

    def test_mode_must_be_first_line(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_profiles("\nmode: set\nexample.com/pkg/a.go:1.1,2.2 1 1\n")
        assert str(exc_info.value) == "bad mode line: "

    def test_mode_only(self) -> None:
        assert parse_profiles("mode: set") == {}

    @pytest.mark.parametrize("mode", ["set", "count", "atomic"])
    def test_mode_recorded_on_profiles(self, mode: str) -> None:
        profiles = parse_profiles(f"mode: {mode}\nexample.com/pkg/a.go:1.1,2.2 1 1\n")
        assert profiles["example.com/pkg/a.go"].mode == mode


class TestRecordLines:
    def test_parse_cover_profile(self) -> None:
        profiles = parse_profiles(_GO_COVER_PROFILE)
        assert list(profiles) == ["example.com/mypkg/foo.go", "example.com/mypkg/bar.go"]

        foo = profiles["example.com/mypkg/foo.go"]
        assert len(foo.blocks) == 2
        first = foo.blocks[0]
        assert (first.start_line, first.start_col, first.end_line, first.end_col) == (5, 2, 7, 4)
        assert first.num_stmt == 2
        assert first.count == 1
        assert first.file_name == "example.com/mypkg/foo.go"

    def test_malformed_line_fails(self) -> None:
        content = "mode: set\nthis-is-not-a-valid-coverage-line\n"
        with pytest.raises(ParseError) as exc_info:
            parse_profiles(content)
        assert "this-is-not-a-valid-coverage-line" in str(exc_info.value)

    def test_blank_lines_are_skipped(self) -> None:
        content = "mode: set\n\n   \nexample.com/pkg/ws.go:1.1,2.2 1 1\n\n"
        profiles = parse_profiles(content)
        assert len(profiles["example.com/pkg/ws.go"].blocks) == 1

    def test_crlf_line_endings(self) -> None:
        content = "mode: count\r\nexample.com/pkg/win.go:1.1,2.2 1 4\r\n"
        profiles = parse_profiles(content)
        assert profiles["example.com/pkg/win.go"].blocks[0].count == 4

    def test_file_names_with_colons(self) -> None:
        content = "mode: set\nC:/src/pkg/a.go:3.1,4.2 1 1\n"
        profiles = parse_profiles(content)
        assert "C:/src/pkg/a.go" in profiles

    def test_blocks_sorted_by_start(self) -> None:
        content = (
            "mode: set\n"
            "example.com/pkg/sorted.go:20.1,22.2 2 1\n"
            "example.com/pkg/sorted.go:5.7,7.2 2 1\n"
            "example.com/pkg/sorted.go:5.1,5.6 1 1\n"
        )
        blocks = parse_profiles(content)["example.com/pkg/sorted.go"].blocks
        assert [(b.start_line, b.start_col) for b in blocks] == [(5, 1), (5, 7), (20, 1)]


class TestDuplicateBlocks:
    def test_set_mode_ors_counts(self) -> None:
        content = (
            "mode: set\n"
            "example.com/pkg/dup.go:1.1,2.2 1 0\n"
            "example.com/pkg/dup.go:1.1,2.2 1 1\n"
        )
        blocks = parse_profiles(content)["example.com/pkg/dup.go"].blocks
        assert len(blocks) == 1
        assert blocks[0].count == 1

    def test_count_mode_sums_counts(self) -> None:
        content = (
            "mode: count\n"
            "example.com/pkg/dup.go:1.1,2.2 1 3\n"
            "example.com/pkg/dup.go:1.1,2.2 1 4\n"
        )
        blocks = parse_profiles(content)["example.com/pkg/dup.go"].blocks
        assert len(blocks) == 1
        assert blocks[0].count == 7

    def test_inconsistent_statement_count(self) -> None:
        content = (
            "mode: count\n"
            "example.com/pkg/dup.go:1.1,2.2 1 3\n"
            "example.com/pkg/dup.go:1.1,2.2 2 4\n"
        )
        with pytest.raises(ParseError, match="inconsistent NumStmt"):
            parse_profiles(content)


class TestAdapterEntryPoints:
    def test_parse_stream(self) -> None:
        profiles = GoCoverAdapter().parse(io.StringIO(_GO_COVER_PROFILE))
        assert len(profiles) == 2

    def test_parse_coverage_file(self, tmp_path: Path) -> None:
        profile = _write_file(tmp_path, "coverage.out", _GO_COVER_PROFILE)
        profiles = GoCoverAdapter().parse_coverage_file(profile)
        assert "example.com/mypkg/bar.go" in profiles

    def test_parse_missing_file_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            GoCoverAdapter().parse_coverage_file(Path("/nonexistent/coverage.out"))

"""Tree-sitter wrapper for parsing Go source files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

import tree_sitter
import tree_sitter_language_pack as tslp

if TYPE_CHECKING:
    from tree_sitter_language_pack import SupportedLanguage

logger = logging.getLogger(__name__)

GO_LANGUAGE = "go"


@dataclass
class FunctionInfo:
    """A function or method declaration and its line span."""

    name: str
    start_line: int
    end_line: int
    receiver: str | None = None
    """Receiver type name without pointer marker; None for plain functions."""

    @property
    def is_method(self) -> bool:
        return self.receiver is not None

    def contains(self, line_number: int) -> bool:
        """Return True if *line_number* falls inside the declaration."""
        return self.start_line <= line_number <= self.end_line


# ── Module-level caches ──────────────────────────────────────────
_parser_cache: dict[str, tree_sitter.Parser] = {}


def get_parser(language: str = GO_LANGUAGE) -> tree_sitter.Parser:
    """Get a (cached) tree-sitter parser for the given language."""
    cached = _parser_cache.get(language)
    if cached is not None:
        return cached
    parser = tslp.get_parser(cast("SupportedLanguage", language))
    _parser_cache[language] = parser
    return parser


def parse_code(source: bytes, language: str = GO_LANGUAGE) -> tree_sitter.Tree:
    """Parse source code bytes into a tree-sitter AST."""
    return get_parser(language).parse(source)


def collect_error_ranges(root: tree_sitter.Node) -> list[tuple[int, int]]:
    """Collect line ranges of parse error nodes."""
    errors: list[tuple[int, int]] = []
    _walk_errors(root, errors)
    return errors


def _walk_errors(node: tree_sitter.Node, errors: list[tuple[int, int]]) -> None:
    if node.is_error or node.is_missing:
        errors.append((node.start_point.row + 1, node.end_point.row + 1))
    for child in node.children:
        _walk_errors(child, errors)


def node_text(node: tree_sitter.Node | None) -> str:
    """Decode node text from bytes, returning empty string for None."""
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="replace") if node.text else ""

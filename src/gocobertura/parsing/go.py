"""Go declaration scanner."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gocobertura.parsing.treesitter import (
    FunctionInfo,
    collect_error_ranges,
    node_text,
    parse_code,
)

if TYPE_CHECKING:
    import tree_sitter

logger = logging.getLogger(__name__)

_DECLARATION_TYPES = frozenset({"function_declaration", "method_declaration"})


class GoExtractor:
    """Extracts top-level function and method declarations from Go source."""

    language = "go"

    def extract_functions(self, source: bytes) -> list[FunctionInfo]:
        """Return declarations in source order with 1-based line spans."""
        root = parse_code(source, self.language).root_node
        if root.has_error:
            logger.debug("Go source has parse errors at %s", collect_error_ranges(root))
        return [
            self._parse_declaration(child)
            for child in root.children
            if child.type in _DECLARATION_TYPES
        ]

    def _parse_declaration(self, node: tree_sitter.Node) -> FunctionInfo:
        receiver = None
        if node.type == "method_declaration":
            receiver = self._receiver_type(node.child_by_field_name("receiver"))
        return FunctionInfo(
            name=node_text(node.child_by_field_name("name")),
            start_line=node.start_point.row + 1,
            end_line=node.end_point.row + 1,
            receiver=receiver,
        )

    def _receiver_type(self, receiver: tree_sitter.Node | None) -> str:
        if receiver is None:
            return ""
        for child in receiver.children:
            if child.type == "parameter_declaration":
                return _base_type_name(child.child_by_field_name("type"))
        return ""


def _base_type_name(node: tree_sitter.Node | None) -> str:
    """Return the receiver type name without pointer marker or type parameters."""
    if node is not None and node.type == "pointer_type" and node.named_children:
        node = node.named_children[0]
    if node is not None and node.type == "generic_type":
        node = node.child_by_field_name("type")
    return node_text(node).lstrip("*").split("[", 1)[0].strip()


def scan_declarations(source: bytes) -> list[FunctionInfo]:
    """Return the function and method declarations of a Go file."""
    return GoExtractor().extract_functions(source)

"""Go source parsing used to recover method boundaries."""

from gocobertura.parsing.go import GoExtractor, scan_declarations
from gocobertura.parsing.treesitter import FunctionInfo, get_parser, parse_code

__all__ = [
    "FunctionInfo",
    "GoExtractor",
    "get_parser",
    "parse_code",
    "scan_declarations",
]

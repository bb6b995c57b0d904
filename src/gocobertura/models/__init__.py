"""Data models for the Cobertura document."""

from gocobertura.models.coverage import (
    NO_CLASS_NAME,
    Class,
    Coverage,
    Line,
    Method,
    Package,
    hit_rate,
)

__all__ = [
    "NO_CLASS_NAME",
    "Class",
    "Coverage",
    "Line",
    "Method",
    "Package",
    "hit_rate",
]

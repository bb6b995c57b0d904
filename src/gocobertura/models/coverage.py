"""Cobertura document model: coverage -> package -> class -> method -> line."""

from __future__ import annotations

from dataclasses import dataclass, field

NO_CLASS_NAME = "-"


@dataclass
class Line:
    """Hit count for a single source line."""

    number: int
    hits: int

    @property
    def is_covered(self) -> bool:
        """Return True if this line was executed at least once."""
        return self.hits > 0


def hit_rate(lines: list[Line]) -> float:
    """Return the fraction of *lines* with hits, 0.0 when there are none."""
    if not lines:
        return 0.0
    return sum(1 for line in lines if line.is_covered) / len(lines)


@dataclass
class Method:
    """A function or method declaration and the lines inside its span."""

    name: str
    lines: list[Line] = field(default_factory=list)
    signature: str = ""
    branch_rate: float = 1.0
    complexity: float = 1.0

    @property
    def line_rate(self) -> float:
        return hit_rate(self.lines)


@dataclass
class Class:
    """Coverage for one Go source file."""

    name: str
    filename: str
    methods: list[Method] = field(default_factory=list)
    lines: list[Line] = field(default_factory=list)
    branch_rate: float = 1.0
    complexity: float = 1.0

    @property
    def line_rate(self) -> float:
        return hit_rate(self.lines)

    @property
    def lines_covered(self) -> int:
        return sum(1 for line in self.lines if line.is_covered)


@dataclass
class Package:
    """Classes grouped under one Go import path."""

    name: str
    classes: list[Class] = field(default_factory=list)
    branch_rate: float = 1.0
    complexity: float = 1.0

    @property
    def lines_valid(self) -> int:
        return sum(len(cls.lines) for cls in self.classes)

    @property
    def lines_covered(self) -> int:
        return sum(cls.lines_covered for cls in self.classes)

    @property
    def line_rate(self) -> float:
        total = self.lines_valid
        if total == 0:
            return 0.0
        return self.lines_covered / total


@dataclass
class Coverage:
    """Root of the Cobertura document."""

    sources: list[str] = field(default_factory=list)
    packages: list[Package] = field(default_factory=list)
    timestamp: int = 0
    version: str = ""
    branch_rate: float = 1.0
    branches_covered: int = 0
    branches_valid: int = 0
    complexity: float = 1.0

    @property
    def lines_valid(self) -> int:
        return sum(pkg.lines_valid for pkg in self.packages)

    @property
    def lines_covered(self) -> int:
        return sum(pkg.lines_covered for pkg in self.packages)

    @property
    def line_rate(self) -> float:
        total = self.lines_valid
        if total == 0:
            return 0.0
        return self.lines_covered / total

"""Cobertura XML reporter — serializes the coverage document.

Produces XML consumable by CI systems and coverage badges (Jenkins, GitLab,
Azure DevOps, Codecov, etc.) from a ``Coverage`` document.
"""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, BinaryIO

from gocobertura.errors import OutputError

if TYPE_CHECKING:
    from pathlib import Path

    from gocobertura.models.coverage import Class, Coverage, Line, Method, Package

logger = logging.getLogger(__name__)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
COBERTURA_DTD_DECL = (
    '<!DOCTYPE coverage SYSTEM "http://cobertura.sourceforge.net/xml/coverage-04.dtd">'
)


class CoberturaXMLReporter:
    """Write Cobertura XML reports.

    Output is the XML declaration, the Cobertura document type declaration
    and a ``<coverage>`` root element, written incrementally to the sink.
    """

    def write(self, coverage: Coverage, sink: BinaryIO) -> None:
        """Stream the report to a binary sink.

        Raises:
            OutputError: If the sink rejects a write.
        """
        tree = ET.ElementTree(_build_xml(coverage))
        ET.indent(tree, space="  ")
        try:
            sink.write(XML_HEADER.encode("utf-8"))
            sink.write(COBERTURA_DTD_DECL.encode("utf-8") + b"\n")
            tree.write(sink, encoding="utf-8", xml_declaration=False)
            sink.write(b"\n")
            sink.flush()
        except (OSError, ValueError) as exc:
            raise OutputError(str(exc)) from exc

    def generate(self, coverage: Coverage, output_path: Path) -> Path:
        """Write a Cobertura XML report file.

        Args:
            coverage: The coverage document.
            output_path: Path to write the XML file.

        Returns:
            The path to the generated XML file.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("wb") as sink:
            self.write(coverage, sink)
        logger.info("Cobertura XML report written to %s", output_path)
        return output_path

    def generate_string(self, coverage: Coverage) -> str:
        """Return the Cobertura XML report as a string."""
        buffer = io.BytesIO()
        self.write(coverage, buffer)
        return buffer.getvalue().decode("utf-8")


def _rate(value: float) -> str:
    """Shortest round-trip form, with integral values written without ``.0``."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _build_xml(coverage: Coverage) -> ET.Element:
    """Build the Cobertura element tree from a ``Coverage`` document."""
    root = ET.Element("coverage")
    root.set("line-rate", _rate(coverage.line_rate))
    root.set("branch-rate", _rate(coverage.branch_rate))
    root.set("lines-covered", str(coverage.lines_covered))
    root.set("lines-valid", str(coverage.lines_valid))
    root.set("branches-covered", str(coverage.branches_covered))
    root.set("branches-valid", str(coverage.branches_valid))
    root.set("complexity", _rate(coverage.complexity))
    root.set("version", coverage.version)
    root.set("timestamp", str(coverage.timestamp))

    sources = ET.SubElement(root, "sources")
    for source in coverage.sources:
        ET.SubElement(sources, "source").text = source

    packages = ET.SubElement(root, "packages")
    for pkg in coverage.packages:
        _add_package(packages, pkg)
    return root


def _add_package(parent: ET.Element, pkg: Package) -> None:
    elem = ET.SubElement(parent, "package")
    elem.set("name", pkg.name)
    elem.set("line-rate", _rate(pkg.line_rate))
    elem.set("branch-rate", _rate(pkg.branch_rate))
    elem.set("complexity", _rate(pkg.complexity))
    classes = ET.SubElement(elem, "classes")
    for cls in pkg.classes:
        _add_class(classes, cls)


def _add_class(parent: ET.Element, cls: Class) -> None:
    elem = ET.SubElement(parent, "class")
    elem.set("name", cls.name)
    elem.set("filename", cls.filename)
    elem.set("line-rate", _rate(cls.line_rate))
    elem.set("branch-rate", _rate(cls.branch_rate))
    elem.set("complexity", _rate(cls.complexity))
    methods = ET.SubElement(elem, "methods")
    for method in cls.methods:
        _add_method(methods, method)
    _add_lines(elem, cls.lines)


def _add_method(parent: ET.Element, method: Method) -> None:
    elem = ET.SubElement(parent, "method")
    elem.set("name", method.name)
    elem.set("signature", method.signature)
    elem.set("line-rate", _rate(method.line_rate))
    elem.set("branch-rate", _rate(method.branch_rate))
    elem.set("complexity", _rate(method.complexity))
    _add_lines(elem, method.lines)


def _add_lines(parent: ET.Element, lines: list[Line]) -> None:
    container = ET.SubElement(parent, "lines")
    for line in lines:
        line_elem = ET.SubElement(container, "line")
        line_elem.set("number", str(line.number))
        line_elem.set("hits", str(line.hits))

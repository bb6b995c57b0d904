"""Convert a Go cover profile into a Cobertura XML report.

The pipeline is parse -> resolve packages -> aggregate -> emit. A conversion
holds no global state, so independent conversions may run concurrently as
long as each one has its own input and output.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, BinaryIO, TextIO

from gocobertura import __version__
from gocobertura.adapters.coverage.go_cover_adapter import parse_profiles
from gocobertura.adapters.packages.go_list import GoListResolver
from gocobertura.aggregator import CoverageAggregator, package_import_path, read_source
from gocobertura.reporters.cobertura_xml import CoberturaXMLReporter

if TYPE_CHECKING:
    from gocobertura.adapters.packages.base import PackageResolver
    from gocobertura.aggregator import SourceReader
    from gocobertura.ignore import Ignore
    from gocobertura.models.coverage import Coverage

logger = logging.getLogger(__name__)


def build_coverage(
    text: str,
    ignore: Ignore | None = None,
    resolver: PackageResolver | None = None,
    *,
    reader: SourceReader = read_source,
    timestamp: int = 0,
    version: str = __version__,
) -> Coverage:
    """Parse profile text and build the coverage document without writing it.

    Raises:
        ParseError: If the profile is malformed.
        ResolutionError: If a covered file has no module metadata.
        SourceReadError: If a source file cannot be read.
    """
    profiles = parse_profiles(text)
    import_paths = list(dict.fromkeys(package_import_path(name) for name in profiles))
    if import_paths:
        resolver = resolver if resolver is not None else GoListResolver()
        packages = resolver.resolve(import_paths)
    else:
        packages = {}

    aggregator = CoverageAggregator(packages, ignore, reader=reader)
    aggregator.add_profiles(profiles)
    return aggregator.build(timestamp=timestamp, version=version)


def convert(
    source: TextIO,
    sink: BinaryIO,
    ignore: Ignore | None = None,
    resolver: PackageResolver | None = None,
    *,
    reader: SourceReader = read_source,
    timestamp: int = 0,
) -> Coverage:
    """Read a cover profile from *source* and write Cobertura XML to *sink*.

    Bytes already written to *sink* are invalid when this raises.

    Args:
        source: Text stream with the cover profile.
        sink: Binary stream receiving the XML document.
        ignore: Filter for files to leave out; ignores nothing by default.
        resolver: Package metadata source; ``go list`` by default.
        reader: Reads source files to recover method boundaries.
        timestamp: Value of the ``timestamp`` attribute, in milliseconds.

    Returns:
        The coverage document that was written.

    Raises:
        ConversionError: On any parse, resolution, read or output failure.
    """
    coverage = build_coverage(
        source.read(),
        ignore,
        resolver,
        reader=reader,
        timestamp=timestamp,
    )
    CoberturaXMLReporter().write(coverage, sink)
    logger.info(
        "Converted %d package(s), %d/%d lines covered",
        len(coverage.packages),
        coverage.lines_covered,
        coverage.lines_valid,
    )
    return coverage

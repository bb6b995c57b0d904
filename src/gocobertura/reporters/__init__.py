"""Report writers."""

from gocobertura.reporters.cobertura_xml import (
    COBERTURA_DTD_DECL,
    XML_HEADER,
    CoberturaXMLReporter,
)

__all__ = ["COBERTURA_DTD_DECL", "XML_HEADER", "CoberturaXMLReporter"]

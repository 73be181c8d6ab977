"""Core document processing.

This module defines the schema validator and the document parser that
together turn raw document text into an executable, template-resolved
business process test.

The primary public entry point is `DocumentParser`.
"""

from .parser import DocumentParser, DocumentSummary, ParsedTest, ResolvedAction, ValidationReport
from .validator import SchemaValidator, ValidationResult

__all__ = (
    'DocumentParser',
    'DocumentSummary',
    'ParsedTest',
    'ResolvedAction',
    'SchemaValidator',
    'ValidationReport',
    'ValidationResult',
)

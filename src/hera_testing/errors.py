"""Core exception hierarchy.

This module defines the error types used across the library to report
malformed documents, schema violations and structurally impossible oracle
inputs in a structured and extensible way.

Template placeholders that can not be resolved and failed oracle verdicts
are not errors and are never raised.
"""

from os import linesep
from typing import TYPE_CHECKING, Literal, TypedDict

from pydantic import Field
from yaml.error import MarkedYAMLError

from hera_testing.models import SchemaModel

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Self

if TYPE_CHECKING:
    from yaml.error import YAMLError

FORMAT_FILENAME = '<unicode string>'
FORMAT_INDENT = 4

#: Kind of a document parsing failure.
type ParseErrorKind = Literal['malformed-document', 'schema-invalid']


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the source file where the error occurred.
    filename: str | None

    #: Line number in the source file.
    line_num: int | None
    #: Column number in the source file.
    column_num: int | None

    #: Underlying exception that triggered formatting.
    error: Exception | None


class ErrorFormatter:
    """Utility class for formatting document errors.

    This formatter is responsible for producing human-readable
    error messages with optional source location and the source
    snippet of YAML parsing errors.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)
        message += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)

        return message

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including filename, line
            and column numbers when available.
        """
        indent = cls._ensure_indent(indent)

        filename = context.get('filename')
        if not filename:
            filename = FORMAT_FILENAME

        message = f'{indent}in "{filename}"'
        if (line_num := context.get('line_num')) is not None:
            line_num += 1
            message += f', line {line_num}'
            if (column_num := context.get('column_num')) is not None:
                column_num += 1
                message += f', column {column_num}'
        message += linesep

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet illustrating the error context.

        Args:
            context: Error context containing the YAML parsing error.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        if (error := context.get('error')) and isinstance(error, MarkedYAMLError):
            snippet = ''
            if error.problem_mark is not None:
                snippet = error.problem_mark.get_snippet(indent=0) or ''
            return cls._make_indent(snippet, indent)

        return ''

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string.

        Empty or whitespace-only lines are omitted.
        """
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation given as a string or number of spaces."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class SchemaIssue(SchemaModel):
    """Single structural violation found in a test document."""

    path: str = Field(
        title='Element path',
        description=(
            'Location of the offending element, for example '
            '`steps[0].actions[1].data.entity_name`. '
            'Empty for document-level issues.'
        ),
    )
    message: str = Field(
        title='Message',
        description='Human-readable reason of the violation.',
    )

    def __str__(self) -> str:
        """String representation."""
        if not self.path:
            return self.message

        return f'{self.path}: {self.message}'


class HeraTestingError(Exception, ErrorFormatter):
    """Base exception for all hera-testing errors.

    All custom exceptions raised by the library should inherit from
    this class to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional location values.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)


class ParseError(HeraTestingError):
    """Error raised when a document can not be turned into a test model.

    The `kind` tells a malformed document (deserialization failed) apart
    from a schema-invalid one. Schema-invalid errors always carry the
    complete list of issues found by the schema validator.
    """

    def __init__(self, message: str, *,
                 kind: ParseErrorKind,
                 issues: 'Iterable[SchemaIssue]' = (),
                 context: ErrorContext | None = None) -> None:
        """Initialize a parse error.

        Args:
            message: Human-readable error description.
            kind: Kind of the parsing failure.
            issues: Schema violations, for schema-invalid documents.
            context: Error context containing optional location values.
        """
        self.kind = kind
        self.issues = tuple(issues)

        super().__init__(message, context=context)

    @classmethod
    def from_yaml_error(cls, error: 'YAMLError', *,
                        filename: str | None = None) -> 'Self':
        """Create a malformed-document error from a YAML parsing failure.

        Args:
            error: Exception raised by the YAML parser.
            filename: Optional name of the source file.

        Returns:
            ParseError representing the deserialization failure.
        """
        error_context = ErrorContext(filename=filename, error=error)

        message = 'Malformed document'
        if isinstance(error, MarkedYAMLError):
            if error.problem_mark is not None:
                error_context['filename'] = filename or error.problem_mark.name
                error_context['line_num'] = error.problem_mark.line
                error_context['column_num'] = error.problem_mark.column
            if error.problem:
                message += f'{linesep}{' ' * FORMAT_INDENT}{error.problem}'

        return cls(message, kind='malformed-document', context=error_context)

    @classmethod
    def from_issues(cls, issues: 'Iterable[SchemaIssue]', *,
                    filename: str | None = None) -> 'Self':
        """Create a schema-invalid error from a list of issues.

        Args:
            issues: Violations reported by the schema validator.
            filename: Optional name of the source file.

        Returns:
            ParseError carrying every issue.
        """
        issues = tuple(issues)

        message = f'Invalid document ({len(issues)} issues)'
        for issue in issues:
            message += f'{linesep}{' ' * FORMAT_INDENT}{issue}'

        error_context = None
        if filename:
            error_context = ErrorContext(filename=filename)

        return cls(message, kind='schema-invalid', issues=issues, context=error_context)


class OracleInputError(HeraTestingError, TypeError):
    """Error raised when an oracle receives a structurally impossible input.

    Missing optional data never raises. This error is reserved for
    arguments of the wrong shape, such as a record list that is not
    a sequence at all.
    """

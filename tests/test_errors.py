"""Tests for errors formatting."""

import pytest
import yaml

from hera_testing.errors import (
    ErrorFormatter,
    HeraTestingError,
    OracleInputError,
    ParseError,
    SchemaIssue,
)


def test_format_without_context() -> None:
    """Keep the message as is without context."""
    assert ErrorFormatter.format('Broken') == 'Broken'


def test_format_with_location() -> None:
    """Append the location without a snippet for non-YAML errors."""
    message = ErrorFormatter.format('Broken', {
        'filename': 'order.yaml',
        'line_num': 4,
        'column_num': 2,
        'error': ValueError('broken'),
    })

    assert message.splitlines() == [
        'Broken',
        '    in "order.yaml", line 5, column 3',
    ]


def test_format_with_yaml_snippet() -> None:
    """Show the source snippet of a YAML parsing error."""
    with pytest.raises(yaml.MarkedYAMLError) as base:
        yaml.safe_load('id: order\ntitle: [unclosed\n')

    message = ErrorFormatter.format('Broken', {'error': base.value})

    lines = message.splitlines()
    assert lines[0] == 'Broken'
    assert lines[1] == '    in "<unicode string>"'
    assert all(line.startswith(' ' * 8) for line in lines[2:])
    assert len(lines) > 2


def test_format_unknown_file() -> None:
    """Name an unknown source as a unicode string."""
    message = ErrorFormatter.format('Broken', {'line_num': 0})

    assert '    in "<unicode string>", line 1' in message


@pytest.mark.parametrize('issue, text', (
    pytest.param(SchemaIssue(path='steps[0].persona', message='Unknown'), 'steps[0].persona: Unknown', id='path'),
    pytest.param(SchemaIssue(path='', message='Document is empty'), 'Document is empty', id='root'),
))
def test_schema_issue(issue: SchemaIssue, text: str) -> None:
    """Render issues with their path."""
    assert str(issue) == text


def test_parse_error_from_yaml_error() -> None:
    """Locate the problem of a malformed document."""
    with pytest.raises(yaml.YAMLError) as base:
        yaml.safe_load('id: [unclosed')

    error = ParseError.from_yaml_error(base.value, filename='order.yaml')

    assert error.kind == 'malformed-document'
    assert error.context['filename'] == 'order.yaml'
    assert error.context['line_num'] == 0
    assert str(error).startswith('Malformed document')
    assert 'in "order.yaml", line 1' in str(error)


def test_parse_error_from_issues() -> None:
    """List every issue in the message."""
    issues = [
        SchemaIssue(path='title', message='Field required'),
        SchemaIssue(path='steps', message='List should have at least 1 item after validation, not 0'),
    ]

    error = ParseError.from_issues(issues)

    assert error.kind == 'schema-invalid'
    assert error.issues == tuple(issues)
    assert str(error).splitlines() == [
        'Invalid document (2 issues)',
        '    title: Field required',
        '    steps: List should have at least 1 item after validation, not 0',
    ]


def test_oracle_input_error() -> None:
    """Catch impossible oracle inputs as library or type errors."""
    error = OracleInputError('accounts must be a sequence of records, got NoneType')

    assert isinstance(error, HeraTestingError)
    assert isinstance(error, TypeError)
    assert str(error) == 'accounts must be a sequence of records, got NoneType'

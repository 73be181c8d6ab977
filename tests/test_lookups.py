"""Tests for dotted-path variable lookups."""

from typing import Any

import pytest

from hera_testing.lookups import MISSING, VariableLookup


@pytest.mark.parametrize('path, context, expected', (
    pytest.param(
        'simpleVar',
        {'simpleVar': 42},
        42,
        id='simple name',
    ),
    pytest.param(
        'objVar.field',
        {'objVar': {'field': 42}},
        42,
        id='dotted path on mapping',
    ),
    pytest.param(
        'objVar.lstField.1.field',
        {'objVar': {'lstField': ['ignore this', {'field': 42}]}},
        42,
        id='dotted path on sequence',
    ),
    pytest.param(
        'objVar.field',
        {'objVar': {'field': None}},
        None,
        id='found none',
    ),
))
def test_defined_variable(path: str, context: dict[str, Any],
                          expected: Any) -> None:  # noqa: ANN401
    """Resolve a variable using a dotted path."""
    lookup = VariableLookup(path)

    assert lookup(context) == expected
    assert lookup(context) is not MISSING


@pytest.mark.parametrize('path, context', (
    pytest.param('obj.lst..1.var', {'obj': {'lst': []}}, id='empty segment'),
    pytest.param('obj.lst.1.var', {'obj': {'lst': ['ignore this']}}, id='index out of range'),
    pytest.param('obj.var.field', {'obj': 42}, id='scalar container'),
    pytest.param('obj.first', {'obj': ['a', 'b']}, id='named segment on sequence'),
    pytest.param('absent', {}, id='undefined'),
    pytest.param('_var', {'_var': 1}, id='starts with underscore'),
    pytest.param('0var', {'0var': 1}, id='starts with digit'),
))
def test_missing_variable(path: str, context: dict[str, Any]) -> None:
    """Tell missing values apart from found ones."""
    lookup = VariableLookup(path)

    assert lookup(context) is MISSING


def test_missing_is_falsy() -> None:
    """Treat the missing marker as a falsy singleton."""
    assert not MISSING
    assert repr(MISSING) == 'MISSING'

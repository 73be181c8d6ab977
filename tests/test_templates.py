"""Tests for template placeholders resolution."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import pytest

from hera_testing.templates import TemplateResolver, render

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

CLOCK = '2025-01-01T00:00:00.000Z'


@pytest.mark.parametrize('text, context, expected', (
    pytest.param(
        'plain text',
        {'customer': {'id': 'C1'}},
        'plain text',
        id='no placeholders',
    ),
    pytest.param(
        '{{unknown_var}}',
        {},
        '{{unknown_var}}',
        id='unresolved',
    ),
    pytest.param(
        '{{customer.id}}',
        {'customer': {'id': 'C1'}},
        'C1',
        id='dotted path',
    ),
    pytest.param(
        '{{ customer.id }}',
        {'customer': {'id': 'C1'}},
        'C1',
        id='padded expression',
    ),
    pytest.param(
        '{{order.lines.1.sku}}',
        {'order': {'lines': [{'sku': 'A'}, {'sku': 'B'}]}},
        'B',
        id='dotted path on sequence',
    ),
    pytest.param(
        '{{clock+60}}',
        {'clock': CLOCK},
        '2025-01-01T00:01:00.000Z',
        id='relative clock',
    ),
    pytest.param(
        '{{clock}}',
        {'clock': CLOCK},
        CLOCK,
        id='clock',
    ),
    pytest.param(
        '{{clock-60}}',
        {'clock': CLOCK},
        '{{clock-60}}',
        id='clock subtraction',
    ),
    pytest.param(
        '{{clock+60}}',
        {'clock': 'yesterday'},
        '{{clock+60}}',
        id='malformed clock',
    ),
    pytest.param(
        'Order {{order.id}} for {{customer.name}}',
        {'customer': {'name': 'Mario'}},
        'Order {{order.id}} for Mario',
        id='partially resolved',
    ),
    pytest.param(
        '{{customer.missing}}',
        {'customer': {'id': 'C1'}},
        '{{customer.missing}}',
        id='missing field',
    ),
    pytest.param(
        '{{customer.note}}',
        {'customer': {'note': None}},
        'null',
        id='found none',
    ),
    pytest.param(
        '{{total}}/{{paid}}/{{rate}}',
        {'total': 25.0, 'paid': True, 'rate': 0.05},
        '25/true/0.05',
        id='scalars',
    ),
))
def test_resolve_string(text: str, context: dict[str, Any], expected: str) -> None:
    """Resolve placeholders of a string."""
    resolver = TemplateResolver(context, timestamp=0)

    assert resolver(text) == expected


def test_timestamp() -> None:
    """Resolve the run timestamp captured by the resolver."""
    resolver = TemplateResolver({}, timestamp=1735689600000)

    assert resolver('order-{{timestamp}}') == 'order-1735689600000'


def test_timestamp_from_context() -> None:
    """Prefer a context variable named `timestamp`."""
    resolver = TemplateResolver({'timestamp': 42}, timestamp=0)

    assert resolver('{{timestamp}}') == '42'


def test_timestamp_captured_once(mocker: 'MockerFixture') -> None:
    """Capture the timestamp when the resolver is created."""
    patched = mocker.patch(
        'hera_testing.templates.now',
        return_value=datetime(2025, 1, 1, tzinfo=UTC),
    )

    resolver = TemplateResolver({})

    assert resolver(['{{timestamp}}', '{{timestamp}}']) == ['1735689600000', '1735689600000']
    patched.assert_called_once()


def test_clock_defaults_to_now(mocker: 'MockerFixture') -> None:
    """Shift the current time when the context has no clock."""
    mocker.patch(
        'hera_testing.templates.now',
        return_value=datetime(2025, 6, 1, 12, 0, tzinfo=UTC),
    )

    resolver = TemplateResolver({})

    assert resolver('{{clock+3600}}') == '2025-06-01T13:00:00.000Z'


def test_resolve_nested() -> None:
    """Resolve string leaves of nested containers, keeping their types."""
    resolver = TemplateResolver({'customer': {'id': 'C1'}}, timestamp=0)

    resolved = resolver({
        'reference': '{{customer.id}}',
        'lines': [{'entity': '{{customer.id}}', 'amount': 10}],
        'pair': ('{{customer.id}}', None),
        'flag': False,
    })

    assert resolved == {
        'reference': 'C1',
        'lines': [{'entity': 'C1', 'amount': 10}],
        'pair': ('C1', None),
        'flag': False,
    }


def test_resolver_does_not_mutate() -> None:
    """Leave the input value and the context unchanged."""
    context = {'customer': {'id': 'C1'}}
    value = {'reference': '{{customer.id}}'}

    TemplateResolver(context, timestamp=0)(value)

    assert value == {'reference': '{{customer.id}}'}
    assert context == {'customer': {'id': 'C1'}}


@pytest.mark.parametrize('value, expected', (
    pytest.param('text', 'text', id='str'),
    pytest.param(None, 'null', id='none'),
    pytest.param(False, 'false', id='bool'),
    pytest.param(3, '3', id='int'),
    pytest.param(2.0, '2', id='integral float'),
    pytest.param(2.5, '2.5', id='float'),
    pytest.param(datetime(2025, 1, 1, tzinfo=UTC), '2025-01-01T00:00:00.000Z', id='datetime'),
    pytest.param({'id': 'C1', 'tags': [1, 2]}, '{"id":"C1","tags":[1,2]}', id='mapping'),
))
def test_render(value: Any, expected: str) -> None:  # noqa: ANN401
    """Render context values as text."""
    assert render(value) == expected

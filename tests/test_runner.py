"""Tests for the runner contract."""

from typing import TYPE_CHECKING
from uuid import UUID

import pytest

from hera_testing.core import DocumentParser
from hera_testing.runner import execute, result_name
from hera_testing.schema import SetDynamicFieldAction, WaitAction

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


def test_execute(order_document: str, mocker: 'MockerFixture') -> None:
    """Execute actions in order, storing results for later actions."""
    parser = DocumentParser()
    test, context = parser.parse_with_context(order_document)

    def perform(action, persona):  # noqa: ANN001, ANN202
        match action.action_type:
            case 'create_entity':
                return {'id': 'C1', 'entity_name': action.data.entity_name}
            case 'create_transaction':
                return {'id': 'O1', 'reference': action.data.reference_entity_id}
            case 'api_call':
                return {'status': 200, 'endpoint': action.endpoint}
            case _:
                return None

    executor = mocker.Mock(side_effect=perform)

    results = execute(test, executor, context)

    assert [(result.phase, result.step_id) for result in results] == [
        ('setup', None),
        ('step', 'take-order'),
        ('step', 'pay'),
        ('cleanup', None),
    ]
    assert results[1].result == {'id': 'O1', 'reference': 'C1'}
    assert results[2].result == {'status': 200, 'endpoint': '/api/orders/O1/pay'}
    assert results[3].result is None

    assert context['customer']['id'] == 'C1'
    assert context['order'] == {'id': 'O1', 'reference': 'C1'}

    personas = [call.args[1] for call in executor.call_args_list]
    assert personas == [None, test.personas['waiter'], test.personas['cashier'], None]


def test_execute_propagates_errors(order_document: str, mocker: 'MockerFixture') -> None:
    """Stop at the first executor failure."""
    parser = DocumentParser()
    test, context = parser.parse_with_context(order_document)

    executor = mocker.Mock(side_effect=RuntimeError('backend unavailable'))

    with pytest.raises(RuntimeError, match='backend unavailable'):
        execute(test, executor, context)

    executor.assert_called_once()
    assert 'customer' not in context


@pytest.mark.parametrize('action', (
    pytest.param(WaitAction(action_type='wait', duration=1), id='wait'),
    pytest.param(SetDynamicFieldAction(
        action_type='set_dynamic_field',
        entity_id='C1',
        field_name='credit_limit',
        field_value=500,
        smart_code='HERA.REST.CRM.CUST.DYN.v1',
    ), id='dynamic field'),
))
def test_actions_without_result(action: WaitAction | SetDynamicFieldAction) -> None:
    """Store no result of actions that can not declare one."""
    assert result_name(action) is None


def test_execute_keeps_unstored_results(order_document: str, mocker: 'MockerFixture') -> None:
    """Pass through results of actions storing nothing without normalizing them."""
    parser = DocumentParser()
    test, context = parser.parse_with_context(order_document)

    receipt = UUID('12345678-1234-5678-1234-567812345678')

    def perform(action, persona):  # noqa: ANN001, ANN202, ARG001
        if action.action_type == 'wait':
            return receipt
        return {'id': 'X1', 'total': 25.5}

    results = execute(test, mocker.Mock(side_effect=perform), context)

    assert results[3].result is receipt
    assert results[2].result == {'id': 'X1', 'total': 25.5}


def test_execute_rejects_unsupported_stored_result(order_document: str,
                                                   mocker: 'MockerFixture') -> None:
    """Fail on stored results that are not plain values."""
    parser = DocumentParser()
    test, context = parser.parse_with_context(order_document)

    executor = mocker.Mock(return_value=object())

    with pytest.raises(TypeError, match='unsupported type'):
        execute(test, executor, context)

    assert 'customer' not in context

"""Tests for the command-line interface."""

from json import loads
from typing import TYPE_CHECKING

import pytest
import yaml
from click.testing import CliRunner

from hera_testing.__main__ import cli

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


@pytest.fixture
def runner() -> CliRunner:
    """Provide a click test runner."""
    return CliRunner()


def test_schema(runner: CliRunner) -> None:
    """Print the JSON Schema of test documents."""
    result = runner.invoke(cli, ['schema'])

    assert result.exit_code == 0

    schema = loads(result.output)
    assert schema['title'] == 'hera-testing'
    assert 'CreateEntityAction' in schema['$defs']
    assert 'steps' in schema['required']


def test_validate(runner: CliRunner, fs: 'FakeFilesystem', order_document: str) -> None:
    """Report valid documents."""
    fs.create_file('order.yaml', contents=order_document)

    result = runner.invoke(cli, ['validate', 'order.yaml'])

    assert result.exit_code == 0
    assert result.output == 'order.yaml: OK\n'


def test_validate_invalid(runner: CliRunner, fs: 'FakeFilesystem', order_document: str) -> None:
    """Report every issue and fail if any document is invalid."""
    fs.create_file('order.yaml', contents=order_document)
    fs.create_file('broken.yaml', contents=order_document.replace('method: POST', 'method: PATCH'))

    result = runner.invoke(cli, ['validate', 'order.yaml', 'broken.yaml'])

    assert result.exit_code == 1
    assert 'order.yaml: OK' in result.output
    assert 'broken.yaml: 1 issues' in result.output
    assert 'steps[1].actions[0].method' in result.output
    assert '1 of 2 documents are invalid' in result.output


def test_validate_missing_file(runner: CliRunner, fs: 'FakeFilesystem') -> None:  # noqa: ARG001
    """Reject paths that do not exist."""
    result = runner.invoke(cli, ['validate', 'missing.yaml'])

    assert result.exit_code == 2


def test_info(runner: CliRunner, fs: 'FakeFilesystem', order_document: str) -> None:
    """Print document metadata as JSON."""
    fs.create_file('order.yaml', contents=order_document)

    result = runner.invoke(cli, ['info', 'order.yaml'])

    assert result.exit_code == 0
    assert loads(result.output) == {
        'id': 'restaurant-order-flow',
        'title': 'Restaurant order to payment',
        'industry': 'restaurant',
        'step_count': 2,
        'persona_count': 2,
        'estimated_duration': 90,
    }


def test_resolve(runner: CliRunner, fs: 'FakeFilesystem', order_document: str) -> None:
    """Print the resolved document as YAML."""
    fs.create_file('order.yaml', contents=order_document)

    result = runner.invoke(cli, ['resolve', '--clock', '2030-01-01T00:00:00.000Z', 'order.yaml'])

    assert result.exit_code == 0

    document = yaml.safe_load(result.output)
    order = document['steps'][0]['actions'][0]
    assert order['data']['metadata']['served_at'] == '2030-01-01T00:01:00.000Z'
    assert order['data']['reference_entity_id'] == '{{customer.id}}'
    assert order['store_as'] == 'order'


def test_resolve_clock_from_settings(runner: CliRunner, fs: 'FakeFilesystem',
                                     order_document: str, monkeypatch: pytest.MonkeyPatch) -> None:
    """Use the configured clock when none is given."""
    monkeypatch.setenv('HERA_TESTING_CLOCK', '2031-01-01T00:00:00.000Z')
    fs.create_file('order.yaml', contents=order_document)

    result = runner.invoke(cli, ['resolve', 'order.yaml'])

    document = yaml.safe_load(result.output)
    served_at = document['steps'][0]['actions'][0]['data']['metadata']['served_at']
    assert served_at == '2031-01-01T00:01:00.000Z'


def test_resolve_invalid(runner: CliRunner, fs: 'FakeFilesystem', order_document: str) -> None:
    """Fail with the parsing error of an invalid document."""
    fs.create_file('order.yaml', contents=order_document.replace('persona: waiter', 'persona: chef'))

    result = runner.invoke(cli, ['resolve', 'order.yaml'])

    assert result.exit_code == 1
    assert 'Invalid document (1 issues)' in result.output
    assert "Unknown persona 'chef'" in result.output

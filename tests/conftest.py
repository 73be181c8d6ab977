"""Tests configurations and fixtures."""

from copy import deepcopy
from typing import TYPE_CHECKING, Any

import pytest
import yaml

if TYPE_CHECKING:
    from collections.abc import Callable

ORDER_DOCUMENT = '''
id: restaurant-order-flow
title: Restaurant order to payment
industry: restaurant
context:
  tenant: mario
  organization_id: org-1
  clock: '2025-01-01T00:00:00.000Z'
personas:
  waiter:
    role: sales
  cashier:
    role: accountant
setup:
  - action_type: create_entity
    data:
      entity_type: customer
      entity_name: Walk-in {{timestamp}}
      smart_code: HERA.REST.CRM.CUST.ENT.v1
    store_as: customer
steps:
  - id: take-order
    description: Waiter takes the order
    persona: waiter
    actions:
      - action_type: create_transaction
        data:
          transaction_type: sale
          smart_code: HERA.REST.SALES.ORDER.SALE.v1
          reference_entity_id: '{{customer.id}}'
          metadata:
            organization: '{{test_org_id}}'
            served_at: '{{clock+60}}'
          line_items:
            - line_number: 1
              line_amount: 25.5
              smart_code: HERA.REST.SALES.LINE.ITEM.v1
        store_as: order
  - id: pay
    description: Cashier takes the payment
    persona: cashier
    actions:
      - action_type: api_call
        endpoint: /api/orders/{{order.id}}/pay
        method: POST
cleanup:
  - action_type: wait
    duration: 100
assertions:
  - type: business
    assertions:
      - oracle: tenant_isolation
metadata:
  tags: [restaurant, smoke]
  estimated_duration: 90
'''


@pytest.fixture
def loader() -> type[yaml.SafeLoader]:
    """Provide an isolated YAML SafeLoader class for tests.

    Creates a dedicated subclass of `yaml.SafeLoader` so that
    constructors registered during a test do not leak into other
    tests or affect global loader state.
    """
    class Loader(yaml.SafeLoader):
        pass

    return Loader


@pytest.fixture
def order_document() -> str:
    """Provide the text of a valid restaurant order test document."""
    return ORDER_DOCUMENT


@pytest.fixture
def order_data() -> dict[str, Any]:
    """Provide the deserialized restaurant order test document."""
    return yaml.safe_load(ORDER_DOCUMENT)


@pytest.fixture
def make_document(order_data: dict[str, Any]) -> 'Callable[..., dict[str, Any]]':
    """Provide a factory of document trees derived from the valid one.

    The factory applies top-level overrides to a deep copy of the valid
    document. Keys overridden with `None` are removed.
    """
    def make(**overrides: Any) -> dict[str, Any]:  # noqa: ANN401
        data = deepcopy(order_data)
        for key, value in overrides.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value

        return data

    return make

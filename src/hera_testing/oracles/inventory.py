"""Inventory balance oracle."""

from typing import TYPE_CHECKING, Any, TypedDict

from .base import as_number, ensure_records, has_segment, line_items, round_amount

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

#: Default tolerance for quantity comparisons.
INVENTORY_TOLERANCE = 0.001

INBOUND_MARKERS = ('RECEIPT', 'RETURN')
OUTBOUND_MARKERS = ('ISSUE', 'SALE')

OPENING_BALANCE = 'opening_balance'
CURRENT_BALANCE = 'current_balance'


class Discrepancy(TypedDict):
    """Product whose reconstructed quantity differs from the recorded one."""

    product_id: str
    expected: float
    actual: float


class InventoryVerdict(TypedDict):
    """Verdict of the inventory balance oracle."""

    valid: bool
    discrepancies: list[Discrepancy]
    checked: int


def field_number(record: 'Mapping[str, Any]') -> float:
    """Read the numeric value of a dynamic field.

    The number slot is preferred; a text slot holding a number is
    accepted as well.
    """
    if (value := record.get('field_value_number')) is not None:
        return as_number(value)

    return as_number(record.get('field_value_text'))


def balance_fields(dynamic_fields: 'Sequence[Mapping[str, Any]]',
                   field_name: str) -> dict[str, float]:
    """Collect one balance field per entity, the last record winning."""
    return {
        record['entity_id']: field_number(record)
        for record in dynamic_fields
        if record.get('field_name') == field_name
        and isinstance(record.get('entity_id'), str)
    }


def movement_sign(transaction: 'Mapping[str, Any]') -> int:
    """Direction of stock movement signaled by a transaction smart code."""
    smart_code = transaction.get('smart_code')

    if has_segment(smart_code, *INBOUND_MARKERS):
        return 1
    if has_segment(smart_code, *OUTBOUND_MARKERS):
        return -1

    return 0


def inventory_balance(products: Any, transactions: Any, dynamic_fields: Any, *,  # noqa: ANN401
                      tolerance: float = INVENTORY_TOLERANCE) -> InventoryVerdict:
    """Reconcile recorded stock levels with stock movements.

    The expected quantity of each product is its `opening_balance` plus
    the quantities of receipt and return lines, minus the quantities of
    issue and sale lines. It is compared with the `current_balance`
    dynamic field. Missing balances count as zero.

    Args:
        products: Product entities.
        transactions: Transactions with their line items.
        dynamic_fields: Dynamic field records of the products.
        tolerance: Largest accepted absolute difference.

    Returns:
        The verdict with one discrepancy per mismatching product.

    Raises:
        OracleInputError: If an argument is not a sequence.
    """
    products = ensure_records(products, 'products')
    transactions = ensure_records(transactions, 'transactions')
    dynamic_fields = ensure_records(dynamic_fields, 'dynamic_fields')

    opening = balance_fields(dynamic_fields, OPENING_BALANCE)
    current = balance_fields(dynamic_fields, CURRENT_BALANCE)

    product_ids = list(dict.fromkeys(
        product['id']
        for product in products
        if isinstance(product.get('id'), str)
    ))
    expected = {product_id: opening.get(product_id, 0.0) for product_id in product_ids}

    for transaction in transactions:
        if not (sign := movement_sign(transaction)):
            continue

        for line in line_items(transaction):
            product_id = line.get('line_entity_id')
            if isinstance(product_id, str) and product_id in expected:
                expected[product_id] += sign * as_number(line.get('quantity'))

    discrepancies: list[Discrepancy] = []
    for product_id, quantity in expected.items():
        actual = current.get(product_id, 0.0)
        if abs(quantity - actual) > tolerance:
            discrepancies.append(Discrepancy(
                product_id=product_id,
                expected=round_amount(quantity, 3),
                actual=actual,
            ))

    return InventoryVerdict(
        valid=not discrepancies,
        discrepancies=discrepancies,
        checked=len(product_ids),
    )

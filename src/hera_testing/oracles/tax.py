"""Tax calculation oracle."""

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypedDict

from .base import (
    DEFAULT_TOLERANCE,
    as_number,
    ensure_record,
    get_mapping,
    line_items,
    round_amount,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_TAX_TYPE = 'standard'

DEFAULT_TAX_RATES: 'Mapping[str, float]' = MappingProxyType({
    'standard': 0.05,
    'zero': 0.0,
    'exempt': 0.0,
})


class TaxVerdict(TypedDict):
    """Verdict of the tax calculation oracle."""

    valid: bool
    expected_tax: float
    actual_tax: float
    difference: float
    breakdown: dict[str, float]


def line_key(line: 'Mapping[str, Any]', position: int, tax_type: str) -> str:
    """Breakdown key of a line, `line_<n>_<type>`."""
    number = line.get('line_number')
    if isinstance(number, float) and number.is_integer():
        number = int(number)
    if not isinstance(number, (int, float)) or isinstance(number, bool):
        number = position + 1

    return f'line_{number}_{tax_type}'


def tax_calculation(transaction: Any, rates: 'Mapping[str, float] | None' = None, *,  # noqa: ANN401
                    tolerance: float = DEFAULT_TOLERANCE) -> TaxVerdict:
    """Check the recorded tax amount of a transaction.

    Expected tax of each line is its amount times the rate of its tax
    type, read from the line metadata and `standard` by default. Unknown
    tax types are taxed at zero.

    Args:
        transaction: Transaction with its line items.
        rates: Rates per tax type, the default rates if not provided.
        tolerance: Largest accepted absolute difference.

    Returns:
        The verdict with the per-line breakdown.

    Raises:
        OracleInputError: If the transaction is not a record.
    """
    transaction = ensure_record(transaction, 'transaction')
    rates = DEFAULT_TAX_RATES if rates is None else rates

    breakdown: dict[str, float] = {}
    expected = 0.0

    for position, line in enumerate(line_items(transaction)):
        tax_type = get_mapping(line, 'metadata').get('tax_type')
        if not isinstance(tax_type, str) or not tax_type:
            tax_type = DEFAULT_TAX_TYPE

        tax = as_number(line.get('line_amount')) * as_number(rates.get(tax_type))
        expected += tax

        key = line_key(line, position, tax_type)
        breakdown[key] = round_amount(breakdown.get(key, 0.0) + tax)

    actual = as_number(get_mapping(transaction, 'metadata').get('tax_amount'))
    difference = abs(expected - actual)

    return TaxVerdict(
        valid=difference <= tolerance,
        expected_tax=round_amount(expected),
        actual_tax=round_amount(actual),
        difference=round_amount(difference),
        breakdown=breakdown,
    )

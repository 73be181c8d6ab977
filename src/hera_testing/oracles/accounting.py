"""Accounting equation oracle.

Checks that recorded postings keep `assets == liabilities + equity`.

Each GL account balance is accumulated from the transaction lines that
reference it. Whether a line increases or decreases the balance depends
on the account type and on the line smart code: lines whose code holds
a `DEBIT`, `INCREASE` or `EXPENSE` segment are debit events, every other
line is a credit event. Debit-normal accounts (assets, expenses) grow on
debit events, credit-normal accounts (liabilities, equity, revenue) grow
on credit events.
"""

from typing import TYPE_CHECKING, Any, TypedDict

from .base import (
    DEFAULT_TOLERANCE,
    as_number,
    ensure_records,
    get_mapping,
    has_segment,
    line_items,
    round_amount,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

DEBIT_MARKERS = ('DEBIT', 'INCREASE', 'EXPENSE')

DEBIT_NORMAL = frozenset({'asset', 'expense'})
CREDIT_NORMAL = frozenset({'liability', 'equity', 'revenue'})


class AccountingVerdict(TypedDict):
    """Verdict of the accounting equation oracle."""

    valid: bool
    difference: float
    assets: float
    liabilities: float
    equity: float
    balances: dict[str, float]


def account_type(account: 'Mapping[str, Any]') -> str | None:
    """Read the declared type of a GL account from its metadata."""
    value = get_mapping(account, 'metadata').get('account_type')
    if isinstance(value, str):
        return value.strip().lower()

    return None


def accounting_equation(accounts: Any, transactions: Any, *,  # noqa: ANN401
                        tolerance: float = DEFAULT_TOLERANCE) -> AccountingVerdict:
    """Validate the accounting equation over recorded postings.

    Args:
        accounts: GL account entities.
        transactions: Transactions with their line items.
        tolerance: Largest accepted absolute difference.

    Returns:
        The verdict with category totals and per-account balances,
        rounded to 2 decimals.

    Raises:
        OracleInputError: If an argument is not a sequence.
    """
    accounts = ensure_records(accounts, 'accounts')
    transactions = ensure_records(transactions, 'transactions')

    types: dict[str, str] = {}
    for account in accounts:
        kind = account_type(account)
        if isinstance(account_id := account.get('id'), str) and kind in DEBIT_NORMAL | CREDIT_NORMAL:
            types.setdefault(account_id, kind)

    balances = dict.fromkeys(types, 0.0)

    for transaction in transactions:
        for line in line_items(transaction):
            account_id = line.get('line_entity_id')
            if not isinstance(account_id, str) or account_id not in types:
                continue

            debit = has_segment(line.get('smart_code'), *DEBIT_MARKERS)
            increases = debit if types[account_id] in DEBIT_NORMAL else not debit

            amount = as_number(line.get('line_amount'))
            balances[account_id] += amount if increases else -amount

    totals = {'asset': 0.0, 'liability': 0.0, 'equity': 0.0}
    for account_id, balance in balances.items():
        if types[account_id] in totals:
            totals[types[account_id]] += balance

    difference = abs(totals['asset'] - (totals['liability'] + totals['equity']))

    return AccountingVerdict(
        valid=difference <= tolerance,
        difference=round_amount(difference),
        assets=round_amount(totals['asset']),
        liabilities=round_amount(totals['liability']),
        equity=round_amount(totals['equity']),
        balances={
            account_id: round_amount(balance)
            for account_id, balance in balances.items()
        },
    )

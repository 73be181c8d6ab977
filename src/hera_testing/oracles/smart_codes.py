"""Smart code oracle.

Every record carries a smart code `HERA.<INDUSTRY>.<MODULE>.<FUNCTION>.<TYPE>.v<N>`.
Beyond the pattern itself, well-known record types must carry a segment
naming them, e.g. a `customer` entity code contains `CUST`.
"""

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Literal, TypedDict

from hera_testing.names import SMART_CODE_PATTERN

from .base import ensure_records, has_segment

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

type RecordKind = Literal['entity', 'transaction', 'relationship']

ENTITY_SEGMENTS: 'Mapping[str, str]' = MappingProxyType({
    'customer': 'CUST',
    'vendor': 'VEND',
    'product': 'PROD',
    'employee': 'EMP',
    'gl_account': 'GL',
})

TRANSACTION_SEGMENTS: 'Mapping[str, str]' = MappingProxyType({
    'sale': 'SALE',
    'purchase': 'PUR',
    'payment': 'PAY',
    'journal_entry': 'JE',
})

RELATIONSHIP_SEGMENTS: 'Mapping[str, str]' = MappingProxyType({
    'has_status': 'STATUS',
    'parent_of': 'PARENT',
})


class Violation(TypedDict):
    """Smart code violation of a single record."""

    record_type: RecordKind
    record_id: str | None
    smart_code: str | None
    reason: str


class SmartCodeVerdict(TypedDict):
    """Verdict of the smart code oracle."""

    valid: bool
    violations: list[Violation]
    checked: int


def validate_smart_code(smart_code: Any) -> list[str]:  # noqa: ANN401
    """Validate a single smart code against the universal pattern.

    Args:
        smart_code: Candidate smart code.

    Returns:
        Human-readable issues, empty for a valid code.
    """
    if not isinstance(smart_code, str) or not smart_code:
        return ['Smart code is missing']

    if (match := SMART_CODE_PATTERN.match(smart_code)) is None:
        return [f'Smart code {smart_code!r} does not match pattern {SMART_CODE_PATTERN.pattern}']

    if int(match['version']) < 1:
        return [f'Smart code {smart_code!r} has version below 1']

    return []


def check_records(kind: RecordKind, records: 'Sequence[Mapping[str, Any]]',
                  type_key: str, segments: 'Mapping[str, str]') -> list[Violation]:
    """Check smart codes of records of one kind.

    Args:
        kind: Record kind reported in violations.
        records: Records to check.
        type_key: Field holding the record type.
        segments: Segment required for each known record type.

    Returns:
        Violations in record order.
    """
    violations: list[Violation] = []

    for record in records:
        smart_code = record.get('smart_code')
        reasons = validate_smart_code(smart_code)

        record_type = str(record.get(type_key, '')).lower()
        if not reasons and (segment := segments.get(record_type)):
            if not has_segment(smart_code, segment):
                reasons.append(f'Smart code of {record_type} {kind} must contain {segment!r} segment')

        violations.extend(
            Violation(
                record_type=kind,
                record_id=record.get('id'),
                smart_code=smart_code if isinstance(smart_code, str) else None,
                reason=reason,
            )
            for reason in reasons
        )

    return violations


def smart_code_validation(entities: Any, transactions: Any,  # noqa: ANN401
                          relationships: Any) -> SmartCodeVerdict:  # noqa: ANN401
    """Validate smart codes of all records.

    Args:
        entities: Entity records.
        transactions: Transaction records.
        relationships: Relationship records.

    Returns:
        The verdict with one flat list of violations.

    Raises:
        OracleInputError: If an argument is not a sequence.
    """
    entities = ensure_records(entities, 'entities')
    transactions = ensure_records(transactions, 'transactions')
    relationships = ensure_records(relationships, 'relationships')

    violations = [
        *check_records('entity', entities, 'entity_type', ENTITY_SEGMENTS),
        *check_records('transaction', transactions, 'transaction_type', TRANSACTION_SEGMENTS),
        *check_records('relationship', relationships, 'relationship_type', RELATIONSHIP_SEGMENTS),
    ]

    return SmartCodeVerdict(
        valid=not violations,
        violations=violations,
        checked=len(entities) + len(transactions) + len(relationships),
    )

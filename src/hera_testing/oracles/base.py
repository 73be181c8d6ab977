"""Shared helpers for business oracles.

Oracles operate on generic, possibly incomplete records. The helpers
below read such records tolerantly: missing or mistyped optional data
becomes zero, empty, or `None`, and only a record list that is not a
sequence at all is rejected.
"""

from datetime import date
from typing import TYPE_CHECKING, Any

from hera_testing.clock import parse_timestamp
from hera_testing.errors import OracleInputError
from hera_testing.values import MAPPINGS, SEQUENCES

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

#: Default tolerance for monetary comparisons.
DEFAULT_TOLERANCE = 0.01

#: Relationship type linking a record to a status entity.
HAS_STATUS = 'has_status'


def ensure_records(value: Any, name: str) -> 'list[Mapping[str, Any]]':  # noqa: ANN401
    """Check a record list argument and drop items that are not records.

    Args:
        value: Argument received by an oracle.
        name: Argument name, for the error message.

    Returns:
        The mapping items of the sequence.

    Raises:
        OracleInputError: If the value is not a sequence.
    """
    if not isinstance(value, SEQUENCES):
        raise OracleInputError(f'{name} must be a sequence of records, got {type(value).__name__}')

    return [item for item in value if isinstance(item, MAPPINGS)]


def ensure_record(value: Any, name: str) -> 'Mapping[str, Any]':  # noqa: ANN401
    """Check a single record argument.

    Raises:
        OracleInputError: If the value is not a mapping.
    """
    if not isinstance(value, MAPPINGS):
        raise OracleInputError(f'{name} must be a record, got {type(value).__name__}')

    return value


def as_number(value: Any, default: float = 0.0) -> float:  # noqa: ANN401
    """Read a numeric value, falling back to a default."""
    if isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default

    return default


def round_amount(value: float, digits: int = 2) -> float:
    """Round an amount, normalizing negative zero."""
    return round(value, digits) + 0.0


def get_mapping(record: 'Mapping[str, Any]', key: str) -> 'Mapping[str, Any]':
    """Read a nested mapping of a record, empty if absent."""
    value = record.get(key)
    if isinstance(value, MAPPINGS):
        return value

    return {}


def line_items(transaction: 'Mapping[str, Any]') -> 'list[Mapping[str, Any]]':
    """Read the line items of a transaction, empty if absent."""
    lines = transaction.get('line_items')
    if not isinstance(lines, SEQUENCES):
        return []

    return [line for line in lines if isinstance(line, MAPPINGS)]


def code_segments(smart_code: Any) -> tuple[str, ...]:  # noqa: ANN401
    """Split a smart code into its dot-separated segments."""
    if not isinstance(smart_code, str):
        return ()

    return tuple(smart_code.split('.'))


def has_segment(smart_code: Any, *markers: str) -> bool:  # noqa: ANN401
    """Check whether a smart code contains any of the given segments."""
    segments = code_segments(smart_code)

    return any(marker in segments for marker in markers)


def index_by_id(records: 'Sequence[Mapping[str, Any]]') -> 'dict[str, Mapping[str, Any]]':
    """Index records by their `id`, the first record winning."""
    index: dict[str, Mapping[str, Any]] = {}
    for record in records:
        if isinstance(key := record.get('id'), str):
            index.setdefault(key, record)

    return index


def timestamp_key(relationship: 'Mapping[str, Any]') -> float:
    """Sort key of a status relationship, oldest first.

    Timestamps may be epoch numbers or ISO-8601 strings. Relationships
    without a readable timestamp sort before all others.
    """
    value = get_mapping(relationship, 'relationship_data').get('timestamp')

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)

    if isinstance(value, (str, date)) and (parsed := parse_timestamp(value)) is not None:
        return parsed.timestamp() * 1000

    return float('-inf')


def status_edges(record_id: Any,  # noqa: ANN401
                 relationships: 'Sequence[Mapping[str, Any]]') -> 'list[Mapping[str, Any]]':
    """Select status relationships of a record, most recent first.

    Relationships with equal timestamps keep their input order.

    Args:
        record_id: Identifier of the entity or transaction.
        relationships: All known relationships.

    Returns:
        The `has_status` relationships leaving the record.
    """
    edges = [
        relationship
        for relationship in relationships
        if relationship.get('from_entity_id') == record_id
        and str(relationship.get('relationship_type', '')).lower() == HAS_STATUS
    ]

    return sorted(edges, key=timestamp_key, reverse=True)


def status_code(status: 'Mapping[str, Any] | None') -> str | None:
    """Read the code of a status entity.

    The entity code is preferred, then the entity name. Codes are
    compared in upper case.
    """
    if not status:
        return None

    for key in ('entity_code', 'entity_name'):
        if isinstance(value := status.get(key), str) and value.strip():
            return normalize_code(value)

    return None


def normalize_code(value: str) -> str:
    """Normalize a status or stage code."""
    return value.strip().upper().replace(' ', '_').replace('-', '_')


def lookup(index: 'Mapping[str, Mapping[str, Any]]',
           key: Any) -> 'Mapping[str, Any] | None':  # noqa: ANN401
    """Find an indexed record, ignoring keys that are not identifiers."""
    if not isinstance(key, str):
        return None

    return index.get(key)

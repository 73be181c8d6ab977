"""Workflow status oracle.

Every workflow-driven record links to status entities with `has_status`
relationships. The current status is the one linked by the most recent
relationship; a record without any status relationship is a draft.
"""

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, TypedDict

from .base import ensure_records, index_by_id, lookup, normalize_code, status_code, status_edges

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

INITIAL_STATUS: Final = 'DRAFT'

WORKFLOW_TRANSITIONS: 'Mapping[str, tuple[str, ...]]' = MappingProxyType({
    'DRAFT': ('PENDING', 'CANCELLED'),
    'PENDING': ('APPROVED', 'REJECTED', 'CANCELLED'),
    'APPROVED': ('IN_PROGRESS', 'CANCELLED'),
    'IN_PROGRESS': ('COMPLETED', 'ON_HOLD', 'CANCELLED'),
    'ON_HOLD': ('IN_PROGRESS', 'CANCELLED'),
    'COMPLETED': ('CLOSED',),
    'REJECTED': ('DRAFT',),
    'CANCELLED': (),
})


class WorkflowVerdict(TypedDict):
    """Verdict of the workflow status oracle."""

    valid: bool
    entity_id: str
    expected_status: str
    current_status: str | None
    valid_transitions: list[str]


def next_statuses(status: str | None) -> list[str]:
    """Return the legal successors of a status, empty if unknown."""
    if status is None:
        return []

    return list(WORKFLOW_TRANSITIONS.get(normalize_code(status), ()))


def current_status(entity_id: str,
                   relationships: 'Sequence[Mapping[str, Any]]',
                   statuses: 'Sequence[Mapping[str, Any]]') -> str | None:
    """Resolve the current status code of a record.

    Returns:
        The status code, `DRAFT` if the record has no status
        relationship, or `None` if the latest relationship points to an
        unknown status entity.
    """
    edges = status_edges(entity_id, relationships)
    if not edges:
        return INITIAL_STATUS

    return status_code(lookup(index_by_id(statuses), edges[0].get('to_entity_id')))


def workflow_status(entity_id: str, expected_status: str,
                    relationships: Any, statuses: Any) -> WorkflowVerdict:  # noqa: ANN401
    """Check the current workflow status of a record.

    Args:
        entity_id: Identifier of the entity or transaction.
        expected_status: Expected status code.
        relationships: Relationships, `has_status` ones are considered.
        statuses: Status entities.

    Returns:
        The verdict with the resolved status and its legal successors.

    Raises:
        OracleInputError: If an argument is not a sequence.
    """
    relationships = ensure_records(relationships, 'relationships')
    statuses = ensure_records(statuses, 'statuses')

    status = current_status(entity_id, relationships, statuses)

    return WorkflowVerdict(
        valid=status is not None and status == normalize_code(expected_status),
        entity_id=entity_id,
        expected_status=expected_status,
        current_status=status,
        valid_transitions=next_statuses(status),
    )

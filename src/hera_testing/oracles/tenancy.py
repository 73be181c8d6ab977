"""Multi-tenant isolation oracle."""

from typing import TYPE_CHECKING, Any, Literal, TypedDict

from .base import ensure_records, index_by_id, lookup

if TYPE_CHECKING:
    from collections.abc import Mapping

type RecordKind = Literal['entity', 'transaction', 'relationship']


class IsolationViolation(TypedDict):
    """Record leaking across organizations."""

    record_type: RecordKind
    record_id: str | None
    organization_id: str | None
    reason: str


class IsolationVerdict(TypedDict):
    """Verdict of the tenant isolation oracle."""

    valid: bool
    organization_id: str
    violations: list[IsolationViolation]


def owner_reason(record: 'Mapping[str, Any]', organization_id: str) -> str | None:
    """Explain why a record is not owned by the organization."""
    owner = record.get('organization_id')
    if owner is None:
        return 'organization id is missing'
    if owner != organization_id:
        return f'belongs to organization {owner!r}'

    return None


def endpoint_reasons(relationship: 'Mapping[str, Any]', organization_id: str,
                     records: 'Mapping[str, Mapping[str, Any]]') -> list[str]:
    """Explain why the endpoints of a relationship leave the organization."""
    reasons: list[str] = []

    for end in ('from', 'to'):
        entity_id = relationship.get(f'{end}_entity_id')
        entity = lookup(records, entity_id)
        if entity is None:
            reasons.append(f'{end} entity {entity_id!r} is unknown')
        elif (reason := owner_reason(entity, organization_id)) is not None:
            reasons.append(f'{end} entity {entity_id!r} {reason}')

    return reasons


def tenant_isolation(organization_id: str, entities: Any,  # noqa: ANN401
                     transactions: Any, relationships: Any) -> IsolationVerdict:  # noqa: ANN401
    """Check that no record leaks outside the target organization.

    Entities and transactions must be owned by the organization. A
    relationship is valid only when it is owned by the organization and
    both its endpoints are known records owned by it too. Endpoints are
    entities, or transactions for status relationships.

    Args:
        organization_id: Target organization.
        entities: Entity records.
        transactions: Transaction records.
        relationships: Relationship records.

    Returns:
        The verdict with at most one violation per record.

    Raises:
        OracleInputError: If an argument is not a sequence.
    """
    entities = ensure_records(entities, 'entities')
    transactions = ensure_records(transactions, 'transactions')
    relationships = ensure_records(relationships, 'relationships')

    known = index_by_id([*entities, *transactions])
    violations: list[IsolationViolation] = []

    def report(kind: RecordKind, record: 'Mapping[str, Any]', reasons: list[str]) -> None:
        if reasons:
            violations.append(IsolationViolation(
                record_type=kind,
                record_id=record.get('id'),
                organization_id=record.get('organization_id'),
                reason='; '.join(reasons),
            ))

    for entity in entities:
        reason = owner_reason(entity, organization_id)
        report('entity', entity, [reason] if reason else [])

    for transaction in transactions:
        reason = owner_reason(transaction, organization_id)
        report('transaction', transaction, [reason] if reason else [])

    for relationship in relationships:
        reasons = endpoint_reasons(relationship, organization_id, known)
        owner = relationship.get('organization_id')
        if owner is not None and owner != organization_id:
            reasons.insert(0, f'belongs to organization {owner!r}')
        report('relationship', relationship, reasons)

    return IsolationVerdict(
        valid=not violations,
        organization_id=organization_id,
        violations=violations,
    )

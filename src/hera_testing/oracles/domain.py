"""Industry specific workflow oracles.

A domain workflow is a fixed stage table. The current stage of an order
is resolved from its `has_status` relationships just like a generic
workflow status. The stage history is also replayed against the table
to report skipped or reversed stages, which fail the verdict only on
request.
"""

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, NamedTuple, TypedDict

from .base import (
    ensure_record,
    ensure_records,
    index_by_id,
    lookup,
    status_code,
    status_edges,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


class DomainWorkflow(NamedTuple):
    """Stage table of an industry workflow."""

    name: str
    initial: str
    transitions: 'Mapping[str, tuple[str, ...]]'

    def next_stages(self, stage: str | None) -> list[str]:
        """Return the legal successors of a stage."""
        if stage is None:
            return []

        return list(self.transitions.get(stage, ()))

    def allows(self, source: str, target: str) -> bool:
        """Check whether a transition between two stages is legal."""
        return target in self.transitions.get(source, ())


RESTAURANT_ORDER_WORKFLOW = DomainWorkflow(
    name='restaurant_order',
    initial='ORDERED',
    transitions=MappingProxyType({
        'ORDERED': ('IN_KITCHEN',),
        'IN_KITCHEN': ('COOKING',),
        'COOKING': ('READY_TO_SERVE',),
        'READY_TO_SERVE': ('SERVED',),
        'SERVED': ('BILLED',),
        'BILLED': ('PAID',),
        'PAID': ('COMPLETED',),
        'COMPLETED': (),
    }),
)


class StageTransition(TypedDict):
    """Illegal hop found in a stage history."""

    from_stage: str
    to_stage: str


class DomainVerdict(TypedDict):
    """Verdict of the domain workflow oracle."""

    valid: bool
    order_id: str | None
    workflow: str
    current_stage: str | None
    history: list[str]
    valid_next_stages: list[str]
    invalid_transitions: list[StageTransition]


def domain_workflow(order: Any, relationships: Any, statuses: Any,  # noqa: ANN401
                    workflow: DomainWorkflow = RESTAURANT_ORDER_WORKFLOW, *,
                    strict_history: bool = False) -> DomainVerdict:
    """Check the stage of an order against an industry workflow.

    Args:
        order: Order transaction.
        relationships: Relationships, `has_status` ones are considered.
        statuses: Status entities.
        workflow: Stage table to check against.
        strict_history: Also invalidate the verdict on illegal hops of
            the stage history.

    Returns:
        The verdict with the current stage, the chronological stage
        history, the legal next stages and the illegal hops of the
        history. The verdict is invalid if the current stage is not part
        of the workflow, or, with `strict_history`, if the history
        contains an illegal transition.

    Raises:
        OracleInputError: If an argument has the wrong shape.
    """
    order = ensure_record(order, 'order')
    relationships = ensure_records(relationships, 'relationships')
    statuses = ensure_records(statuses, 'statuses')

    order_id = order.get('id')
    known = index_by_id(statuses)

    history = [
        status_code(lookup(known, edge.get('to_entity_id')))
        for edge in reversed(status_edges(order_id, relationships))
    ]

    if history:
        current = history[-1]
    else:
        current = workflow.initial

    invalid: list[StageTransition] = []
    previous = workflow.initial
    for stage in history:
        if stage is None or stage == previous:
            continue
        if not workflow.allows(previous, stage):
            invalid.append(StageTransition(from_stage=previous, to_stage=stage))
        previous = stage

    recognized = current is not None and current in workflow.transitions

    return DomainVerdict(
        valid=recognized and not (strict_history and invalid),
        order_id=order_id,
        workflow=workflow.name,
        current_stage=current,
        history=[stage for stage in history if stage is not None],
        valid_next_stages=workflow.next_stages(current) if recognized else [],
        invalid_transitions=invalid,
    )

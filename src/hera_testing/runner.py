"""Runner contract for executing parsed tests.

Actual creation, UI and API operations are performed by an external
executor. This module only drives it: actions are resolved one at a time
in document order, and results of actions declaring `store_as` are
written back into the same run context before the next action is
resolved. Retries and timeouts are the executor's concern.
"""

from logging import getLogger
from typing import TYPE_CHECKING, NamedTuple, Protocol, assert_never

from hera_testing.core import DocumentParser
from hera_testing.schema import (
    ApiCallAction,
    CreateEntityAction,
    CreateRelationshipAction,
    CreateTransactionAction,
    SetDynamicFieldAction,
    UIInteractionAction,
    WaitAction,
)
from hera_testing.values import normalize

if TYPE_CHECKING:
    from hera_testing.context import RunContext
    from hera_testing.core.parser import Phase
    from hera_testing.schema import BusinessProcessTest, Persona, StepAction
    from hera_testing.values import RuntimeValue

logger = getLogger(__name__)


class ActionExecutor(Protocol):
    """Callable performing a resolved action on behalf of a persona."""

    def __call__(self, action: 'StepAction',
                 persona: 'Persona | None') -> 'RuntimeValue':
        """Execute the action and return its result."""
        ...  # pragma: no cover


class ActionResult(NamedTuple):
    """Executed action and the value it produced.

    Results of actions declaring `store_as` are normalized, others are
    kept as returned by the executor.
    """

    phase: 'Phase'
    step_id: str | None
    action: 'StepAction'
    result: 'RuntimeValue'


def result_name(action: 'StepAction') -> str | None:
    """Return the context variable an action result is stored under."""
    match action:
        case CreateEntityAction() | CreateTransactionAction() | CreateRelationshipAction():
            return action.store_as
        case ApiCallAction():
            return action.store_as
        case SetDynamicFieldAction() | UIInteractionAction() | WaitAction():
            return None
        case _:
            assert_never(action)


def execute(test: 'BusinessProcessTest', executor: ActionExecutor,
            context: 'RunContext') -> list[ActionResult]:
    """Execute every action of a test in document order.

    Args:
        test: Parsed test model.
        executor: Callable performing the actions.
        context: Run context used for the parse of the test.

    Returns:
        Results of all executed actions, in execution order.

    Raises:
        Any exception raised by the executor.
    """
    results: list[ActionResult] = []

    for phase, step, action in DocumentParser.iter_actions(test, context):
        persona = test.personas.get(step.persona) if step is not None else None

        logger.debug('Executing %s action %r', phase, action.action_type)
        value = executor(action, persona)

        if name := result_name(action):
            value = normalize(value)
            context.store(name, value)

        results.append(ActionResult(
            phase=phase,
            step_id=step.id if step is not None else None,
            action=action,
            result=value,
        ))

    return results

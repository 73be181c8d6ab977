"""Run-scoped variable context.

A run context holds the variables visible to template expressions during
one test execution. It is seeded with `timestamp`, `test_org_id` and
`clock`, then extended by the runner with the results of actions that
declare `store_as`. A context is never shared between runs.
"""

from typing import TYPE_CHECKING, Self, overload

from hera_testing.clock import epoch_millis, format_timestamp, now
from hera_testing.templates import CLOCK_VARIABLE, TIMESTAMP_VARIABLE, TemplateResolver
from hera_testing.values import Value, normalize

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from hera_testing.values import RuntimeValue

ORGANIZATION_VARIABLE = 'test_org_id'


class RunContext(dict[str, Value]):
    """Execution context for resolving template placeholders.

    The context acts as a mapping of variable names to values and provides
    a template resolver bound to itself, so values stored by earlier
    actions are visible when later actions are resolved.
    """

    @classmethod
    def seed(cls, organization_id: str, *,
             clock: str | None = None,
             timestamp: int | None = None) -> Self:
        """Create a fresh context for a run.

        Args:
            organization_id: Target organization of the test.
            clock: ISO-8601 run clock. Defaults to the current time.
            timestamp: Run timestamp in milliseconds. Defaults to now.

        Returns:
            A new context with the seed variables.
        """
        started = now()

        return cls({
            TIMESTAMP_VARIABLE: timestamp if timestamp is not None else epoch_millis(started),
            ORGANIZATION_VARIABLE: organization_id,
            CLOCK_VARIABLE: clock or format_timestamp(started),
        })

    @property
    def timestamp(self) -> int | None:
        """Run timestamp, if seeded."""
        value = self.get(TIMESTAMP_VARIABLE)
        if isinstance(value, int) and not isinstance(value, bool):
            return value

        return None

    def store(self, name: str, value: 'RuntimeValue') -> None:
        """Store a normalized action result under a variable name.

        Args:
            name: Variable name, usually an action's `store_as`.
            value: Result produced by the runner.
        """
        self[name] = normalize(value)

    @overload
    def resolve[T: Value](self, value: 'Mapping[str, T]') -> 'Mapping[str, T]':
        ...  # pragma: no cover

    @overload
    def resolve[T: Value](self, value: 'Sequence[T]') -> 'Sequence[T]':
        ...  # pragma: no cover

    @overload
    def resolve[T: Value](self, value: T) -> T:
        ...  # pragma: no cover

    def resolve(self, value: 'RuntimeValue') -> 'RuntimeValue':
        """Resolve template placeholders inside a value.

        Args:
            value: A value with `{{...}}` placeholders in its string leaves.

        Returns:
            A new value with resolvable placeholders expanded.
        """
        return TemplateResolver(self, timestamp=self.timestamp)(value)

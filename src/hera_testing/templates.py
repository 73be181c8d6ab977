"""Template expansion for `{{expression}}` placeholders.

Expressions are resolved against a run context in the following order:

1. exact variable name (`{{customer}}`);
2. dotted path into a context value (`{{customer.id}}`, `{{order.lines.0}}`);
3. relative clock (`{{clock+60}}`, seconds added to the run clock);
4. the run timestamp (`{{timestamp}}`), captured once per resolver.

An expression matching none of these is left in place verbatim, so
that a later resolution pass (for example, the runner's) can expand it
once the value becomes known. Resolution never raises and never
mutates the context.
"""

from datetime import date, datetime, timedelta
from json import dumps
from re import compile as regexp
from typing import TYPE_CHECKING

from hera_testing.clock import epoch_millis, format_timestamp, now, parse_timestamp
from hera_testing.lookups import MISSING, VariableLookup

if TYPE_CHECKING:
    from collections.abc import Mapping
    from re import Match

if TYPE_CHECKING:
    from hera_testing.values import RuntimeValue, Value

PLACEHOLDER_PATTERN = regexp(r'\{\{(?P<expression>.*?)\}\}')
CLOCK_PATTERN = regexp(r'^clock\+(?P<seconds>\d+)$')

CLOCK_VARIABLE = 'clock'
TIMESTAMP_VARIABLE = 'timestamp'


def render(value: 'RuntimeValue') -> str:
    """Render a context value for substitution into a string.

    Args:
        value: Context value.

    Returns:
        Text representation of the value.
    """
    if isinstance(value, str):
        return value

    if value is None:
        return 'null'

    if isinstance(value, bool):
        return 'true' if value else 'false'

    if isinstance(value, float) and value.is_integer():
        return str(int(value))

    if isinstance(value, datetime):
        return format_timestamp(value)

    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, (dict, list, tuple)):
        return dumps(value, default=render, ensure_ascii=False, separators=(',', ':'))

    return str(value)


class TemplateResolver:
    """Resolver of `{{...}}` placeholders over nested values.

    The resolver only reads the context it was created with. The context
    may be a live run context: values stored into it after creation are
    visible to later calls.
    """

    def __init__(self, context: 'Mapping[str, Value]', *,
                 timestamp: int | None = None) -> None:
        """Initialize the resolver.

        Args:
            context: Run context used to look up variables.
            timestamp: Run timestamp in milliseconds since the epoch,
                captured now if not provided.
        """
        self.context = context
        self.timestamp = timestamp if timestamp is not None else epoch_millis(now())

    def __call__(self, value: 'RuntimeValue') -> 'RuntimeValue':
        """Resolve placeholders inside a value."""
        return self.resolve(value)

    def resolve(self, value: 'RuntimeValue') -> 'RuntimeValue':
        """Recursively resolve placeholders inside string leaves.

        Mappings and sequences keep their type. Non-string scalars
        are returned unchanged.

        Args:
            value: Arbitrary nested value.

        Returns:
            A new value with every resolvable placeholder expanded.
        """
        if isinstance(value, str):
            return self.resolve_string(value)

        if isinstance(value, dict):
            return {
                key: self.resolve(item)
                for key, item in value.items()
            }

        if isinstance(value, (list, tuple)):
            return type(value)(
                self.resolve(item)
                for item in value
            )

        return value

    def resolve_string(self, text: str) -> str:
        """Resolve every placeholder of a string independently.

        Args:
            text: Text possibly containing `{{...}}` placeholders.

        Returns:
            Text with resolvable placeholders substituted.
        """
        if '{{' not in text:
            return text

        return PLACEHOLDER_PATTERN.sub(self._substitute, text)

    def resolve_expression(self, expression: str) -> str | None:
        """Resolve a single placeholder expression.

        Args:
            expression: Placeholder content without braces.

        Returns:
            Rendered value, or `None` if the expression is unresolved.
        """
        expression = expression.strip()

        if expression in self.context:
            return render(self.context[expression])

        if '.' in expression:
            value = VariableLookup(expression)(self.context)
            if value is not MISSING:
                return render(value)

        if match := CLOCK_PATTERN.match(expression):
            return self._shift_clock(int(match['seconds']))

        if expression == TIMESTAMP_VARIABLE:
            return str(self.timestamp)

        return None

    def _substitute(self, match: 'Match[str]') -> str:
        """Substitute a placeholder match, keeping it when unresolved."""
        resolved = self.resolve_expression(match['expression'])
        if resolved is None:
            return match[0]

        return resolved

    def _shift_clock(self, seconds: int) -> str | None:
        """Add seconds to the run clock.

        Returns:
            Shifted ISO-8601 timestamp, or `None` if the clock stored
            in the context is not a timestamp.
        """
        base = self.context.get(CLOCK_VARIABLE)
        if base is None:
            start = now()
        elif (start := parse_timestamp(base)) is None:
            return None

        return format_timestamp(start + timedelta(seconds=seconds))

"""Dotted-path variable lookup over run context values.

Lookups walk nested mappings and sequences segment by segment. A path
that can not be walked yields the `MISSING` sentinel, which is distinct
from a value that was found and happens to be `None`.
"""

from typing import TYPE_CHECKING, Final, final

from hera_testing.names import VARIABLE_PATTERN

if TYPE_CHECKING:
    from collections.abc import Mapping

if TYPE_CHECKING:
    from hera_testing.values import RuntimeValue


@final
class Missing:
    """Marker for a path segment that is not present."""

    def __repr__(self) -> str:
        """String representation."""
        return 'MISSING'

    def __bool__(self) -> bool:
        """Missing values are falsy."""
        return False


MISSING: Final = Missing()


class VariableLookup:
    """Resolver for dotted-path variable access.

    Resolves values from nested data structures (dicts and lists)
    using a dot-separated path notation. Numeric segments index
    into sequences.

    The resolver never raises: any missing key, invalid index, or
    type mismatch results in `MISSING`.
    """

    def __init__(self, path: str) -> None:
        """Initialize the resolver with a dotted path.

        Args:
            path: Dot-separated path describing how to traverse
                a nested structure. Each segment represents either:
                - a dictionary key
                - a list index (if the segment is numeric)
        """
        self.path = path.strip().split('.')

    @property
    def is_valid(self) -> bool:
        """Whether the first segment is a valid variable name."""
        return bool(VARIABLE_PATTERN.match(self.path[0]))

    def __call__(self, context: 'Mapping[str, RuntimeValue]') -> 'RuntimeValue | Missing':
        """Resolve the variable path against a context."""
        if not self.is_valid:
            return MISSING

        return self.resolve(context)

    def resolve(self, val: 'RuntimeValue', depth: int = 1) -> 'RuntimeValue | Missing':
        """Resolve the variable path against a value.

        Traverses the provided value according to the configured path.
        Resolution stops early if a segment cannot be applied.

        Args:
            val: Current value being resolved.
            depth: Current depth of traversal (used internally).

        Returns:
            The resolved value if the full path is valid, otherwise `MISSING`.
        """
        if depth > len(self.path):
            return val

        key = self.path[depth - 1]
        if not key:
            return MISSING

        next_val: RuntimeValue | Missing = MISSING
        if key.isdecimal() and isinstance(val, (list, tuple)):
            index = int(key)
            if 0 <= index < len(val):
                next_val = val[index]
        elif isinstance(val, dict):
            next_val = val.get(key, MISSING)

        if next_val is MISSING:
            return MISSING

        return self.resolve(next_val, depth + 1)

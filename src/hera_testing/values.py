"""Core type definitions for document and run context values.

This module defines the value type system shared by the template resolver,
the run context and the runner contract, together with utilities to
normalize arbitrary runtime objects into plain DSL values.
"""

from collections.abc import Mapping, Sequence
from datetime import date, datetime, timedelta
from typing import Any

#: Scalars represent fully resolved, atomic values.
type Scalar = date | datetime | timedelta | str | bytes | int | float | bool

#: A value is considered resolved if it is a scalar or a container of
#: resolved values. Run contexts and oracle records hold only values.
type Value = Scalar | Sequence['Value'] | Mapping[str, 'Value'] | None

#: A value in runtime represents any Python object received from
#: a runner, YAML loaders, or user-defined code prior to normalization.
type RuntimeValue = Any

MAPPINGS = (dict,)
SCALARS = (date, datetime, timedelta, str, bytes, int, float, bool)
SEQUENCES = (list, tuple)


def _normalize_key(value: RuntimeValue) -> str:
    """Validate and normalize a mapping key.

    Args:
        value: Candidate mapping key.

    Returns:
        The validated key as a string.

    Raises:
        TypeError: If the provided key is not a string.
    """
    if not isinstance(value, str):
        raise TypeError(f'Can not use {value!r} as mapping key')

    return value


def normalize(value: RuntimeValue) -> Value:
    """Recursively normalize a runtime value into a DSL `Value`.

    Pydantic models are dumped to plain mappings first, so runner results
    may be returned either as models or as plain data.

    Args:
        value: Runtime value to normalize.

    Returns:
        A fully normalized DSL-compatible value.

    Raises:
        TypeError: If the value type is unsupported.
    """
    if value is None:
        return None

    if isinstance(value, SCALARS):
        return value

    if isinstance(value, MAPPINGS):
        return {
           _normalize_key(key): normalize(item)
           for key, item in value.items()
        }

    if isinstance(value, SEQUENCES):
        return [
            normalize(item)
            for item in value
        ]

    if hasattr(value, 'model_dump'):
        return normalize(value.model_dump())

    raise TypeError(f'{value!r} has unsupported type')

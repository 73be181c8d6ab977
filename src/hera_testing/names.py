"""DSL names primitive types and validation rules.

This module defines the identifier and smart code patterns relied upon by
the document schema, the template resolver and the smart code oracle.
"""

from re import ASCII
from re import compile as regexp
from typing import Annotated

from pydantic import Field

#: Base pattern for all DSL identifiers.
#: Identifiers must start with a letter and may contain letters, digits, or underscores
_NAME_PATTERN = r'[a-zA-Z][\w]*'

#: Compiled pattern for variable identifiers
VARIABLE_PATTERN = regexp(
    rf'^(?P<name>{_NAME_PATTERN})$',
    flags=ASCII,
)

#: Universal smart code: `HERA.<INDUSTRY>.<MODULE>.<FUNCTION>.<TYPE>.v<N>`.
SMART_CODE_PATTERN = regexp(
    r'^HERA\.(?P<industry>[A-Z0-9_]+)\.(?P<module>[A-Z0-9_]+)'
    r'\.(?P<function>[A-Z0-9_]+)\.(?P<type>[A-Z0-9_]+)\.v(?P<version>\d+)$',
    flags=ASCII,
)

Variable = Annotated[
    str, Field(
        pattern=rf'^{_NAME_PATTERN}$',
        title='Variable identifier',
        description=(
            'Name of a variable used to store or reference values within '
            'a run context. '
            'Variable identifiers must start with a letter and may contain '
            'letters, digits, or underscores. '
            'Names are restricted to ASCII characters.'
        ),
        examples=[
            'customer',
            'sale_order',
        ],
    ),
]

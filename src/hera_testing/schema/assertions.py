"""Assertion groups evaluated after the test steps.

Assertions form a discriminated union keyed by `type`. Each group holds
a list of checks with a type-specific shape:

- `ui`: checks of page element state;
- `database`: checks over one of the six universal tables;
- `business`: invocations of a business oracle by name.
"""

from typing import Annotated, Any, Literal

from pydantic import Field

from hera_testing.models import SchemaModel

#: Conditions applicable to page elements.
type UICondition = Literal[
    'visible', 'hidden', 'contains', 'not_contains', 'enabled', 'disabled', 'count',
]

#: Universal schema tables.
type Table = Literal[
    'core_organizations',
    'core_entities',
    'core_dynamic_data',
    'core_relationships',
    'universal_transactions',
    'universal_transaction_lines',
]

#: Conditions applicable to table rows.
type DatabaseCondition = Literal['count', 'exists', 'not_exists', 'equals', 'contains']

#: Names of the available business oracles.
type OracleName = Literal[
    'accounting_equation',
    'inventory_balance',
    'workflow_status',
    'tax_calculation',
    'smart_code_validation',
    'tenant_isolation',
    'domain_workflow',
]


class UICheck(SchemaModel):
    """Check of a page element state."""

    selector: str | None = Field(default=None, title='Element selector')
    condition: UICondition = Field(title='Condition')
    value: Any = Field(default=None, title='Expected value')
    timeout: int | None = Field(default=None, ge=0, title='Timeout')


class DatabaseCheck(SchemaModel):
    """Check over the rows of a universal table."""

    table: Table = Field(title='Table')
    condition: DatabaseCondition = Field(title='Condition')
    filters: dict[str, Any] | None = Field(default=None, title='Row filters')
    expected: Any = Field(default=None, title='Expected value')


class BusinessCheck(SchemaModel):
    """Invocation of a business oracle.

    The `expected` mapping supplies oracle arguments that are not part
    of the recorded data, such as the entity and status of a workflow
    check or the transaction of a tax check.
    """

    oracle: OracleName = Field(title='Oracle')
    expected: Any = Field(default=None, title='Oracle arguments')
    tolerance: float | None = Field(default=None, ge=0, title='Numeric tolerance')


class UIAssertion(SchemaModel):
    """Group of UI checks."""

    type: Literal['ui']
    assertions: list[UICheck]


class DatabaseAssertion(SchemaModel):
    """Group of database checks."""

    type: Literal['database']
    assertions: list[DatabaseCheck]


class BusinessAssertion(SchemaModel):
    """Group of business oracle checks."""

    type: Literal['business']
    assertions: list[BusinessCheck]


#: Any assertion group, discriminated by `type`.
Assertion = Annotated[
    UIAssertion | DatabaseAssertion | BusinessAssertion,
    Field(discriminator='type'),
]

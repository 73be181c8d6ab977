"""Universal schema payloads carried by creation actions.

Each model mirrors one of the universal tables a test may write to:
entities, transactions with their lines, and relationships. Payload
values may contain `{{...}}` template placeholders which are expanded
by the document parser before execution.
"""

from typing import Any

from pydantic import Field

from hera_testing.models import SchemaModel


class EntityData(SchemaModel):
    """Master data record to create (customer, product, GL account, ...)."""

    entity_type: str = Field(
        title='Entity type',
        examples=['customer', 'product', 'gl_account'],
    )
    entity_name: str = Field(title='Entity name')
    entity_code: str | None = Field(default=None, title='Entity code')
    smart_code: str = Field(
        title='Smart code',
        examples=['HERA.CRM.CUST.ENT.PROF.v1'],
    )
    metadata: dict[str, Any] | None = Field(default=None, title='Metadata')
    dynamic_fields: dict[str, Any] | None = Field(
        default=None,
        title='Dynamic fields',
        description='Typed key/value extensions attached to the entity on creation.',
    )


class TransactionLineData(SchemaModel):
    """Line item of a transaction."""

    line_entity_id: str | None = Field(
        default=None,
        title='Line entity',
        description='Weak reference to an entity, such as a GL account or a product.',
    )
    line_number: int = Field(title='Line number')
    quantity: float | None = Field(default=None, title='Quantity')
    unit_price: float | None = Field(default=None, title='Unit price')
    line_amount: float = Field(title='Line amount')
    smart_code: str = Field(title='Smart code')
    metadata: dict[str, Any] | None = Field(default=None, title='Metadata')


class TransactionData(SchemaModel):
    """Business event to create, owning its line items."""

    transaction_type: str = Field(
        title='Transaction type',
        examples=['sale', 'purchase', 'journal_entry'],
    )
    transaction_code: str | None = Field(default=None, title='Transaction code')
    smart_code: str = Field(
        title='Smart code',
        examples=['HERA.CRM.SALE.TXN.ORDER.v1'],
    )
    total_amount: float | None = Field(default=None, title='Total amount')
    currency: str | None = Field(default=None, title='Currency')
    reference_entity_id: str | None = Field(default=None, title='Reference entity')
    metadata: dict[str, Any] | None = Field(default=None, title='Metadata')
    line_items: list[TransactionLineData] | None = Field(default=None, title='Line items')


class RelationshipData(SchemaModel):
    """Directed, typed edge between two entities."""

    from_entity_id: str = Field(title='Source entity')
    to_entity_id: str = Field(title='Target entity')
    relationship_type: str = Field(
        title='Relationship type',
        examples=['has_status', 'parent_of'],
    )
    smart_code: str = Field(
        title='Smart code',
        examples=['HERA.WORKFLOW.STATUS.ASSIGN.ENTITY.v1'],
    )
    relationship_data: dict[str, Any] | None = Field(
        default=None,
        title='Relationship data',
        description='Free-form payload. Status edges carry a `timestamp` used for ordering.',
    )

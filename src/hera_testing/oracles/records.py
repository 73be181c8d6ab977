"""Record shapes consumed by business oracles.

Records are read-only snapshots produced by the runner from the universal
tables. They are plain mappings: oracles read them with `.get` and treat
any missing optional key as zero or empty.
"""

from typing import Any, NotRequired, TypedDict


class EntityRecord(TypedDict):
    """Master data record (customer, product, GL account, status, ...)."""

    id: str
    entity_type: str
    entity_name: str
    smart_code: str
    entity_code: NotRequired[str]
    organization_id: NotRequired[str]
    metadata: NotRequired[dict[str, Any]]


class TransactionLineRecord(TypedDict):
    """Line item of a transaction."""

    id: str
    line_number: int
    line_amount: float
    smart_code: str
    quantity: NotRequired[float]
    unit_price: NotRequired[float]
    line_entity_id: NotRequired[str]
    metadata: NotRequired[dict[str, Any]]


class TransactionRecord(TypedDict):
    """Business event together with its line items."""

    id: str
    transaction_type: str
    smart_code: str
    transaction_code: NotRequired[str]
    total_amount: NotRequired[float]
    reference_entity_id: NotRequired[str]
    organization_id: NotRequired[str]
    metadata: NotRequired[dict[str, Any]]
    line_items: NotRequired[list[TransactionLineRecord]]


class RelationshipRecord(TypedDict):
    """Directed, typed edge between two entities."""

    id: str
    from_entity_id: str
    to_entity_id: str
    relationship_type: str
    smart_code: str
    organization_id: NotRequired[str]
    relationship_data: NotRequired[dict[str, Any]]


class DynamicFieldRecord(TypedDict):
    """Typed value attached to an entity. One value slot is populated."""

    entity_id: str
    field_name: str
    smart_code: str
    field_value_text: NotRequired[str]
    field_value_number: NotRequired[float]
    field_value_boolean: NotRequired[bool]
    field_value_date: NotRequired[str]


class DataSnapshot(TypedDict, total=False):
    """Everything a runner recorded for one test run."""

    organization_id: str
    entities: list[EntityRecord]
    transactions: list[TransactionRecord]
    relationships: list[RelationshipRecord]
    dynamic_fields: list[DynamicFieldRecord]

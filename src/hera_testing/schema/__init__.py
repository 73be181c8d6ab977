"""Declarative schema of business process test documents.

Defines immutable Pydantic models describing personas, setup and cleanup
actions, ordered steps and assertions. The module specifies the structural
contract of a test document and is consumed by the schema validator, the
document parser and external runners.
"""

from .actions import (
    ApiCallAction,
    CreateEntityAction,
    CreateRelationshipAction,
    CreateTransactionAction,
    SetDynamicFieldAction,
    StepAction,
    UIInteractionAction,
    WaitAction,
)
from .assertions import (
    Assertion,
    BusinessAssertion,
    BusinessCheck,
    DatabaseAssertion,
    DatabaseCheck,
    OracleName,
    UIAssertion,
    UICheck,
)
from .documents import BusinessProcessTest, Persona, Step, TestContext, TestMetadata
from .records import EntityData, RelationshipData, TransactionData, TransactionLineData

__all__ = (
    'ApiCallAction',
    'Assertion',
    'BusinessAssertion',
    'BusinessCheck',
    'BusinessProcessTest',
    'CreateEntityAction',
    'CreateRelationshipAction',
    'CreateTransactionAction',
    'DatabaseAssertion',
    'DatabaseCheck',
    'EntityData',
    'OracleName',
    'Persona',
    'RelationshipData',
    'SetDynamicFieldAction',
    'Step',
    'StepAction',
    'TestContext',
    'TestMetadata',
    'TransactionData',
    'TransactionLineData',
    'UIAssertion',
    'UICheck',
    'UIInteractionAction',
    'WaitAction',
)

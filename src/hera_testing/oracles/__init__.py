"""Business oracles.

Pure validators of business invariants over recorded data. Every oracle
takes plain records, never mutates them, and returns a verdict mapping
with a `valid` flag and diagnostic details. A failed verdict is a normal
outcome; only arguments of an impossible shape raise `OracleInputError`.

`OracleEngine` runs the oracle named by a `business` assertion check.
"""

from types import MappingProxyType
from typing import TYPE_CHECKING

from .accounting import AccountingVerdict, accounting_equation
from .domain import RESTAURANT_ORDER_WORKFLOW, DomainVerdict, DomainWorkflow, domain_workflow
from .engine import OracleEngine
from .inventory import InventoryVerdict, inventory_balance
from .records import (
    DataSnapshot,
    DynamicFieldRecord,
    EntityRecord,
    RelationshipRecord,
    TransactionLineRecord,
    TransactionRecord,
)
from .smart_codes import SmartCodeVerdict, smart_code_validation, validate_smart_code
from .tax import DEFAULT_TAX_RATES, TaxVerdict, tax_calculation
from .tenancy import IsolationVerdict, tenant_isolation
from .workflow import WORKFLOW_TRANSITIONS, WorkflowVerdict, next_statuses, workflow_status

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

#: Oracle functions by the name used in `business` assertions.
ORACLES: 'Mapping[str, Callable[..., Mapping]]' = MappingProxyType({
    'accounting_equation': accounting_equation,
    'inventory_balance': inventory_balance,
    'workflow_status': workflow_status,
    'tax_calculation': tax_calculation,
    'smart_code_validation': smart_code_validation,
    'tenant_isolation': tenant_isolation,
    'domain_workflow': domain_workflow,
})

__all__ = (
    'DEFAULT_TAX_RATES',
    'ORACLES',
    'RESTAURANT_ORDER_WORKFLOW',
    'WORKFLOW_TRANSITIONS',
    'AccountingVerdict',
    'DataSnapshot',
    'DomainVerdict',
    'DomainWorkflow',
    'DynamicFieldRecord',
    'EntityRecord',
    'InventoryVerdict',
    'IsolationVerdict',
    'OracleEngine',
    'RelationshipRecord',
    'SmartCodeVerdict',
    'TaxVerdict',
    'TransactionLineRecord',
    'TransactionRecord',
    'WorkflowVerdict',
    'accounting_equation',
    'domain_workflow',
    'inventory_balance',
    'next_statuses',
    'smart_code_validation',
    'tax_calculation',
    'tenant_isolation',
    'validate_smart_code',
    'workflow_status',
)

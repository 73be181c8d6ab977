"""Oracle engine.

The engine runs the oracle named by a `business` assertion check over
the data a runner recorded for one test run. Oracle arguments that are
not part of the recorded data are read from the check `expected`
mapping:

- `workflow_status`: `entity_id` and `status`;
- `tax_calculation`: `transaction_id`, optional `rates`;
- `domain_workflow`: `transaction_id`, optional `strict_history`;
- `tenant_isolation`: optional `organization_id`, the snapshot
  organization by default.
"""

from logging import getLogger
from typing import TYPE_CHECKING, Any, assert_never

from hera_testing.settings import HeraTestingSettings
from hera_testing.values import MAPPINGS

from .accounting import accounting_equation
from .base import index_by_id
from .domain import domain_workflow
from .inventory import inventory_balance
from .smart_codes import smart_code_validation
from .tax import tax_calculation
from .tenancy import tenant_isolation
from .workflow import workflow_status

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hera_testing.schema import BusinessCheck

    from .records import DataSnapshot

logger = getLogger(__name__)

PRODUCT = ('product',)
GL_ACCOUNT = ('gl_account',)
STATUS = ('status', 'workflow_status')


class OracleEngine:
    """Evaluator of business oracle checks.

    The engine holds only its settings; each evaluation reads the
    snapshot it is given and nothing else.
    """

    def __init__(self, settings: HeraTestingSettings | None = None) -> None:
        """Initialize the engine.

        Args:
            settings: Default tolerances and tax rates. Resolved from the
                environment if not provided.
        """
        self.settings = settings or HeraTestingSettings()

    def evaluate(self, check: 'BusinessCheck',
                 snapshot: 'DataSnapshot') -> 'Mapping[str, Any]':
        """Run the oracle named by a check.

        Args:
            check: Business assertion check.
            snapshot: Data recorded for the test run.

        Returns:
            The oracle verdict. A check missing a required argument, or
            referring to an unknown record, yields an invalid verdict
            with a `reason`.

        Raises:
            OracleInputError: If the snapshot holds a record list that
                is not a sequence.
        """
        expected = check.expected if isinstance(check.expected, MAPPINGS) else {}

        entities = snapshot.get('entities', [])
        transactions = snapshot.get('transactions', [])
        relationships = snapshot.get('relationships', [])

        logger.debug('Evaluating oracle %r', check.oracle)

        match check.oracle:
            case 'accounting_equation':
                return accounting_equation(
                    self.select(entities, GL_ACCOUNT),
                    transactions,
                    tolerance=self.tolerance(check, self.settings.tolerance),
                )

            case 'inventory_balance':
                return inventory_balance(
                    self.select(entities, PRODUCT),
                    transactions,
                    snapshot.get('dynamic_fields', []),
                    tolerance=self.tolerance(check, self.settings.inventory_tolerance),
                )

            case 'workflow_status':
                entity_id = expected.get('entity_id')
                status = expected.get('status')
                if not isinstance(entity_id, str) or not isinstance(status, str):
                    return rejected('workflow_status requires entity_id and status')

                return workflow_status(
                    entity_id, status, relationships,
                    self.select(entities, STATUS),
                )

            case 'tax_calculation':
                transaction = self.find(transactions, expected.get('transaction_id'))
                if transaction is None:
                    return rejected('tax_calculation requires a known transaction_id')

                rates = expected.get('rates')
                if not isinstance(rates, MAPPINGS):
                    rates = self.settings.tax_rates

                return tax_calculation(
                    transaction, rates,
                    tolerance=self.tolerance(check, self.settings.tolerance),
                )

            case 'smart_code_validation':
                return smart_code_validation(entities, transactions, relationships)

            case 'tenant_isolation':
                organization_id = expected.get('organization_id') or snapshot.get('organization_id')
                if not isinstance(organization_id, str):
                    return rejected('tenant_isolation requires organization_id')

                return tenant_isolation(organization_id, entities, transactions, relationships)

            case 'domain_workflow':
                order = self.find(transactions, expected.get('transaction_id'))
                if order is None:
                    return rejected('domain_workflow requires a known transaction_id')

                return domain_workflow(
                    order, relationships,
                    self.select(entities, STATUS),
                    strict_history=expected.get('strict_history') is True,
                )

            case _:
                assert_never(check.oracle)

    @staticmethod
    def tolerance(check: 'BusinessCheck', default: float) -> float:
        """Return the tolerance of a check, or the configured default."""
        if check.tolerance is None:
            return default

        return check.tolerance

    @staticmethod
    def select(entities: Any, entity_types: tuple[str, ...]) -> Any:  # noqa: ANN401
        """Select entities of the given types, passing malformed input through."""
        if not isinstance(entities, (list, tuple)):
            return entities

        return [
            entity
            for entity in entities
            if isinstance(entity, MAPPINGS) and entity.get('entity_type') in entity_types
        ]

    @staticmethod
    def find(records: Any, record_id: Any) -> 'Mapping[str, Any] | None':  # noqa: ANN401
        """Find a record by its identifier."""
        if not isinstance(record_id, str) or not isinstance(records, (list, tuple)):
            return None

        return index_by_id([record for record in records if isinstance(record, MAPPINGS)]).get(record_id)


def rejected(reason: str) -> dict[str, Any]:
    """Build the verdict of a check that can not be evaluated."""
    logger.debug('Oracle check rejected: %s', reason)
    return {'valid': False, 'reason': reason}

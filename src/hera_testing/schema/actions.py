"""Action variants executed by test steps.

An action is a single operation performed by the runner on behalf of a
persona. Actions form a closed discriminated union keyed by `action_type`:
every variant accepts only its own fields, and an unknown `action_type`
is rejected by the schema validator.

Creation actions and API calls may declare `store_as`. The runner writes
their result into the run context under that name, making it available
to template expressions of the actions that follow.
"""

from typing import Annotated, Any, Literal

from pydantic import Field

from hera_testing.models import SchemaModel
from hera_testing.names import Variable  # noqa: TC001

from .records import EntityData, RelationshipData, TransactionData

#: Available UI interactions.
type Interaction = Literal['click', 'fill', 'select', 'upload', 'wait']

#: Available HTTP methods for API calls.
type HttpMethod = Literal['GET', 'POST', 'PUT', 'DELETE']


class StoreMixin(SchemaModel):
    """Mixin for actions whose result can be captured in the run context."""

    store_as: Variable | None = Field(
        default=None,
        title='Result variable',
        description=(
            'Name under which the action result is stored in the run context.\n'
            'Later actions may reference it with `{{name}}` or `{{name.field}}`.'
        ),
    )


class CreateEntityAction(StoreMixin):
    """Create a master data entity."""

    action_type: Literal['create_entity']
    data: EntityData


class CreateTransactionAction(StoreMixin):
    """Create a transaction together with its line items."""

    action_type: Literal['create_transaction']
    data: TransactionData


class CreateRelationshipAction(StoreMixin):
    """Create a relationship between two entities."""

    action_type: Literal['create_relationship']
    data: RelationshipData


class SetDynamicFieldAction(SchemaModel):
    """Attach a dynamic field value to an entity."""

    action_type: Literal['set_dynamic_field']
    entity_id: str = Field(title='Entity')
    field_name: str = Field(title='Field name')
    field_value: Any = Field(
        default=None,
        title='Field value',
        description='Stored in the typed value slot matching its type.',
    )
    smart_code: str = Field(title='Smart code')


class UIInteractionAction(SchemaModel):
    """Interact with a page element."""

    action_type: Literal['ui_interaction']
    selector: str = Field(title='Element selector')
    interaction: Interaction = Field(title='Interaction')
    value: str | None = Field(default=None, title='Input value')
    timeout: int | None = Field(
        default=None,
        ge=0,
        title='Timeout',
        description='Interaction timeout in milliseconds.',
    )


class ApiCallAction(StoreMixin):
    """Call an HTTP endpoint of the application under test."""

    action_type: Literal['api_call']
    endpoint: str = Field(title='Endpoint')
    method: HttpMethod = Field(title='HTTP method')
    data: dict[str, Any] | None = Field(default=None, title='Request payload')


class WaitAction(SchemaModel):
    """Pause the execution."""

    action_type: Literal['wait']
    duration: int = Field(
        ge=0,
        title='Duration',
        description='Wait duration in milliseconds.',
    )
    condition: str | None = Field(default=None, title='Wait condition')


#: Any executable action, discriminated by `action_type`.
StepAction = Annotated[
    CreateEntityAction
    | CreateTransactionAction
    | CreateRelationshipAction
    | SetDynamicFieldAction
    | UIInteractionAction
    | ApiCallAction
    | WaitAction,
    Field(discriminator='action_type'),
]

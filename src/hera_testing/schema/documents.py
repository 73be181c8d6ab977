"""Business process test document models.

A document declares the tenant context, the personas a test impersonates,
optional setup and cleanup actions, the ordered steps, and the assertions
evaluated once the steps are done.
"""

from datetime import date, datetime
from typing import Literal, Self

from pydantic import Field, ValidationInfo, field_validator, model_validator

from hera_testing.clock import format_timestamp, now, parse_timestamp
from hera_testing.models import DescribedMixin, SchemaModel

from .actions import StepAction  # noqa: TC001
from .assertions import Assertion  # noqa: TC001

#: Roles a persona may take.
type Role = Literal['owner', 'admin', 'manager', 'user', 'accountant', 'warehouse', 'sales', 'hr']

#: Supported industries.
type Industry = Literal[
    'restaurant', 'healthcare', 'retail', 'salon', 'manufacturing', 'professional_services',
]

#: Test priority.
type Priority = Literal['low', 'medium', 'high', 'critical']

#: Supported browser engines.
type Browser = Literal['chromium', 'firefox', 'webkit']

#: Validation context key disabling cross-field checks. The schema
#: validator sets it because it reports those checks on its own.
CROSS_CHECKS = 'cross_checks'


class Persona(SchemaModel):
    """Named role impersonated while executing a step."""

    role: Role = Field(title='Role')
    organization_id: str | None = Field(default=None, title='Organization')
    entity_id: str | None = Field(default=None, title='User entity')
    permissions: list[str] | None = Field(default=None, title='Permissions')


class TestContext(SchemaModel):
    """Tenant and locale context of a test run."""

    __test__ = False

    tenant: str = Field(title='Tenant')
    organization_id: str = Field(
        title='Organization',
        description='Target organization. Seeded into the run context as `test_org_id`.',
    )
    currency: str = Field(default='USD', title='Currency')
    timezone: str = Field(default='UTC', title='Timezone')
    locale: str = Field(default='en-US', title='Locale')
    fiscal_year: int = Field(
        default_factory=lambda: now().year,
        title='Fiscal year',
    )
    clock: str | None = Field(
        default=None,
        title='Frozen clock',
        description=(
            'ISO-8601 timestamp used as `clock` in templates. '
            'Defaults to the current time.'
        ),
    )
    smart_code_prefix: str = Field(default='HERA', title='Smart code prefix')
    industry: Industry | None = Field(default=None, title='Industry')

    @field_validator('clock', mode='before')
    @classmethod
    def normalize_clock(cls, value: object) -> object:
        """Accept unquoted YAML timestamps as the clock value."""
        if isinstance(value, (datetime, date)):
            parsed = parse_timestamp(value)
            if parsed is not None:
                return format_timestamp(parsed)

        return value


class Step(SchemaModel):
    """Ordered unit of work performed by a single persona."""

    id: str = Field(title='Step identifier')
    description: str = Field(title='Description')
    persona: str = Field(
        title='Persona',
        description='Name of a persona declared in the `personas` section.',
    )
    actions: list[StepAction] = Field(title='Actions')
    preconditions: list[str] | None = Field(default=None, title='Preconditions')
    postconditions: list[str] | None = Field(default=None, title='Postconditions')
    timeout: int = Field(
        default=30000,
        ge=0,
        title='Timeout',
        description='Step timeout in milliseconds.',
    )
    retry: int = Field(default=0, ge=0, title='Retry count')


class TestMetadata(SchemaModel):
    """Scheduling and reporting metadata."""

    __test__ = False

    tags: list[str] = Field(default_factory=list, title='Tags')
    priority: Priority = Field(default='medium', title='Priority')
    estimated_duration: int | None = Field(
        default=None,
        ge=0,
        title='Estimated duration',
        description='Expected run time in seconds.',
    )
    requires_auth: bool = Field(default=True, title='Requires authentication')
    requires_data: bool = Field(default=True, title='Requires seed data')
    browser_support: list[Browser] = Field(
        default_factory=lambda: ['chromium'],
        title='Supported browsers',
    )
    mobile_support: bool = Field(default=False, title='Mobile support')


class BusinessProcessTest(DescribedMixin, SchemaModel):
    """Root model of a business process test document."""

    id: str = Field(title='Test identifier')
    industry: str | None = Field(default=None, title='Industry')
    version: str = Field(default='1.0.0', title='Version')
    author: str | None = Field(default=None, title='Author')

    context: TestContext = Field(title='Run context')
    personas: dict[str, Persona] = Field(title='Personas')

    setup: list[StepAction] | None = Field(default=None, title='Setup actions')
    steps: list[Step] = Field(min_length=1, title='Steps')
    cleanup: list[StepAction] | None = Field(default=None, title='Cleanup actions')

    assertions: list[Assertion] = Field(title='Assertions')
    metadata: TestMetadata = Field(default_factory=TestMetadata, title='Metadata')

    @model_validator(mode='after')
    def check_personas(self, info: ValidationInfo) -> Self:
        """Ensure every step refers to a declared persona."""
        if info.context and not info.context.get(CROSS_CHECKS, True):
            return self

        unknown = sorted({
            step.persona
            for step in self.steps
            if step.persona not in self.personas
        })
        if unknown:
            raise ValueError(f'Steps refer to undeclared personas: {", ".join(unknown)}')

        return self

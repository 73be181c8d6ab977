"""Runtime settings.

Settings are resolved from `HERA_TESTING_*` environment variables and
are consumed by the command line interface and the oracle engine. The
oracle functions themselves take every parameter explicitly.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from hera_testing.models import SettingsModel

type LogLevel = Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class HeraTestingSettings(SettingsModel):
    """Settings of the business process test tooling."""

    model_config = SettingsConfigDict(
        env_prefix='HERA_TESTING_',
        frozen=True,
        extra='ignore',
    )

    tolerance: float = Field(
        default=0.01,
        ge=0,
        title='Monetary tolerance',
        description='Default tolerance of accounting and tax oracles.',
    )

    inventory_tolerance: float = Field(
        default=0.001,
        ge=0,
        title='Quantity tolerance',
        description='Default tolerance of the inventory balance oracle.',
    )

    tax_rates: dict[str, float] = Field(
        default_factory=lambda: {'standard': 0.05, 'zero': 0.0, 'exempt': 0.0},
        title='Tax rates',
        description='Rates per tax type, given as JSON in the environment.',
    )

    clock: str | None = Field(
        default=None,
        title='Clock override',
        description='ISO-8601 time used instead of the document clock.',
    )

    log_level: LogLevel = Field(
        default='WARNING',
        title='Log level',
    )

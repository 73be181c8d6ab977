"""Base Pydantic models for DSL elements.

This module defines the foundational model classes used by all test document
structures. It enforces immutability and strict schema validation to guarantee
that parsed business process tests are deterministic, explicit, and safe to
hand over to a runner.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all DSL elements.

    This class serves as the root for all Pydantic models representing
    document constructs such as personas, steps, actions and assertions.

    Design principles enforced by this model:
        - Immutability: parsed elements cannot be modified after creation.
          Template resolution produces new instances instead.
        - Strict schema validation: unknown or extra fields are rejected,
          so an action variant can never carry fields of another variant.

    All DSL models must inherit from this class.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
    )


class DescribedMixin(SchemaModel):
    """Mixin providing element self-documentation.

    The fields defined in this model do not affect execution semantics
    and are used purely for descriptive purposes.
    """

    title: str = Field(
        title='Title',
        description='Short human-readable title of the DSL element.',
    )

    description: str | None = Field(
        default=None,
        title='Description',
        description='Detailed human-readable description of the DSL element.',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored.
          This allows the surrounding environment to contain unrelated
          variables without breaking configuration resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )

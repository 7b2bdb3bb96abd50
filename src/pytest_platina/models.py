"""Base Pydantic models for golden file elements.

This module defines the foundational model classes used by documents,
run results, and runtime settings. Parsed documents are immutable:
update runs never modify a model in place, they build updated copies.
"""

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all golden file elements.

    Design principles enforced by this model:
        - Immutability: elements cannot be modified after creation.
          Updates produce new instances via `model_copy`.
        - Strict schema validation: unknown or extra fields are rejected.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored,
          so unrelated environment variables never break configuration.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )

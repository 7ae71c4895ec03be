"""Mini README: Centralised configuration for budgetbadges.

Structure:
    * BudgetBadgesSettings - pydantic settings model for local runtime options.
    * get_settings - cached accessor shared by the application root.

Usage:
    ``create_ledger`` reads the settings to decide where the ledger keeps its
    JSON files and which storage backend to use. Values may be overridden
    through ``BUDGETBADGES_*`` variables or a ``.env`` file; the ledger itself
    never reads the environment.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BudgetBadgesSettings(BaseSettings):
    """Runtime configuration for the local finance ledger."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGETBADGES_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted transactions, budgets and badges.",
        validate_default=True,
    )
    storage_backend: Literal["json", "memory"] = Field(
        "json",
        description="Storage backend identifier registered with the storage registry.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied by the application root.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value or "data").expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache()
def get_settings() -> BudgetBadgesSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return BudgetBadgesSettings()

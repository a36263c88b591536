"""Mini README: Centralised configuration models and helpers for the fund service.

Structure:
    * MosqueFundSettings - Pydantic settings model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``MOSQUEFUND_*`` environment variables
    (or a local ``.env`` file), choose the store backend, and control how
    amounts are displayed. The configuration is cached so validation runs
    once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MosqueFundSettings(BaseSettings):
    """Runtime configuration for the mosque fund service."""

    model_config = SettingsConfigDict(
        env_prefix="MOSQUEFUND_",
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
        description="Directory holding the persisted sign-in record.",
    )
    store_backend: str = Field(
        "memory",
        description="Registered store backend name, e.g. 'memory' or 'supabase'.",
    )
    supabase_url: Optional[str] = Field(
        None,
        description="Project URL of the hosted database when using the supabase backend.",
    )
    supabase_key: Optional[str] = Field(
        None,
        description="API key used by the supabase backend.",
    )
    persist_session: bool = Field(
        True,
        description="Restore the signed-in profile across process restarts.",
    )
    session_storage_key: str = Field(
        "userProfile",
        description="Key under which the signed-in profile is stored.",
    )
    currency_label: str = Field(
        "BDT",
        description="Label appended to amounts at presentation time.",
    )
    display_precision: int = Field(
        2,
        ge=0,
        le=6,
        description="Fractional digits used when rendering amounts.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        ge=1,
        le=65535,
        description="Port the HTTP service exposes.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value or "data").expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("store_backend")
    @classmethod
    def _normalise_backend(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def session_file(self) -> Path:
        """Location of the persisted sign-in record."""

        return self.data_directory / "session.json"


@lru_cache()
def get_settings() -> MosqueFundSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return MosqueFundSettings()

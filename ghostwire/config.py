"""Ghostwire configuration.

Values come from environment variables, with command-line flags layered
on top by ``python -m ghostwire``.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field


def _default_db_path() -> Path:
    return Path.home() / ".ghostwire" / "ghostwire.db"


class GhostwireConfig(BaseModel):
    """Runtime configuration."""

    executable: str = Field(
        default="httpcli",
        description="Executor binary that performs requests and scans",
    )
    db_path: Path = Field(
        default_factory=_default_db_path,
        description="SQLite file holding collections and history",
    )
    host: str = Field(default="127.0.0.1", description="API bind address")
    port: int = Field(default=8765, description="API port")
    log_level: str = Field(default="INFO", description="Root logging level")

    @classmethod
    def from_env(cls) -> GhostwireConfig:
        """Build a configuration from ``GHOSTWIRE_*`` environment variables."""
        values: dict[str, str] = {}
        for name in cls.model_fields:
            env_val = os.environ.get(f"GHOSTWIRE_{name.upper()}")
            if env_val is not None:
                values[name] = env_val
        return cls(**values)


# Global config instance
_config: GhostwireConfig | None = None


def get_config() -> GhostwireConfig:
    """Get the global configuration."""
    global _config
    if _config is None:
        _config = GhostwireConfig.from_env()
    return _config


def set_config(config: GhostwireConfig | None) -> None:
    """Set (or reset) the global configuration."""
    global _config
    _config = config

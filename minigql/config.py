"""Runtime settings read from the environment.

    MINIGQL_DEBUG            add file/line/trace details to error payloads
    MINIGQL_SCHEMA_SUFFIXES  comma-separated schema file suffixes to load
"""

import os
from typing import Mapping

from pydantic import BaseModel, field_validator

TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Host-controlled switches for minigql."""
    debug: bool = False
    schema_suffixes: tuple[str, ...] = (".graphqls", ".graphql")

    @field_validator("schema_suffixes", mode="before")
    @classmethod
    def _split_suffixes(cls, value):
        if isinstance(value, str):
            return tuple(s.strip() for s in value.split(",") if s.strip())
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ
        values = {}
        if "MINIGQL_DEBUG" in env:
            values["debug"] = env["MINIGQL_DEBUG"].strip().lower() in TRUTHY
        if "MINIGQL_SCHEMA_SUFFIXES" in env:
            values["schema_suffixes"] = env["MINIGQL_SCHEMA_SUFFIXES"]
        return cls(**values)


def get_settings() -> Settings:
    """Return settings for the current environment."""
    return Settings.from_env()

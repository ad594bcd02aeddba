"""Environment driven settings for piece tables and their storage."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .telemetry import ENV_PREFIX, env_flag


@dataclass(frozen=True, slots=True)
class Settings:
    """Knobs read once per table construction.

    ``coalesce_inserts`` toggles extending the previous insertion's piece for
    typing at the same cursor. ``reread_source`` makes file-backed tables
    fetch the file again on every materialize instead of using the copy taken
    at load time.
    """

    encoding: str = "utf-8"
    coalesce_inserts: bool = True
    reread_source: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            encoding=os.getenv(f"{ENV_PREFIX}ENCODING", "utf-8"),
            coalesce_inserts=env_flag("COALESCE", True),
            reread_source=env_flag("REREAD_SOURCE", True),
        )

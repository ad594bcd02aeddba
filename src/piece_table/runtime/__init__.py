"""Process-level services: telemetry and environment settings."""

from . import telemetry
from .settings import Settings

__all__ = ["Settings", "telemetry"]

"""Public API surface for jvp_common."""

from jvp_common.config import parse_bool_env
from jvp_common.errors import (
    ConfigurationError,
    JVPError,
    PatternError,
    RemoteServiceError,
    SessionError,
)
from jvp_common.logging import configure_logging

__all__ = [
    "ConfigurationError",
    "JVPError",
    "PatternError",
    "RemoteServiceError",
    "SessionError",
    "configure_logging",
    "parse_bool_env",
]

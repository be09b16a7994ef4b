"""Shared helpers for jira-version-param."""

from jvp_common.api import (
    ConfigurationError,
    JVPError,
    PatternError,
    RemoteServiceError,
    SessionError,
    configure_logging,
)

__all__ = [
    "configure_logging",
    "ConfigurationError",
    "JVPError",
    "PatternError",
    "RemoteServiceError",
    "SessionError",
]

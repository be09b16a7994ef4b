"""Error types raised while fetching and offering JIRA versions."""

from __future__ import annotations

import json
from typing import Any, Mapping


class JVPError(Exception):
    """Base error carrying a JSON-ready ``context`` describing the failure."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        # Paths, URLs and other objects are stored as their string form.
        self.context: dict[str, Any] = json.loads(
            json.dumps(dict(context or {}), default=str)
        )
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class ConfigurationError(JVPError):
    """No JIRA site configured for the job, or invalid configuration."""


class PatternError(ConfigurationError):
    """Release pattern is not a valid regular expression."""


class SessionError(JVPError):
    """A session with the JIRA site could not be established."""


class RemoteServiceError(JVPError):
    """Transport or protocol failure while talking to JIRA."""

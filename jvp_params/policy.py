"""Selection policy for the JIRA version parameter."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from jvp_common.errors import PatternError
from jvp_jira.models import RemoteVersion


def parse_flag(value: object) -> bool:
    """Decode a form flag: only "true" (any case) is True, anything else False."""
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return False
    return value.lower() == "true"


def format_flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class ReleasePattern:
    """Optional regular expression a version name must fully match.

    An empty source means "no pattern": every name matches.
    """

    compiled: re.Pattern[str] | None = None

    @classmethod
    def from_string(cls, source: str | None) -> "ReleasePattern":
        if not source:
            return cls()
        if not isinstance(source, str):
            raise PatternError(
                f"Release pattern must be a string, got {type(source).__name__}",
                context={"pattern": source},
            )
        try:
            return cls(re.compile(source))
        except re.error as exc:
            raise PatternError(
                f"Invalid release pattern {source!r}: {exc}",
                context={"pattern": source},
                cause=exc,
            ) from exc

    def to_string(self) -> str:
        if self.compiled is None:
            return ""
        return self.compiled.pattern

    def matches(self, name: str) -> bool:
        if self.compiled is None:
            return True
        return self.compiled.fullmatch(name) is not None


@dataclass
class SelectionPolicy:
    """Which versions of which project are offered to the user."""

    project_key: str
    pattern: ReleasePattern = field(default_factory=ReleasePattern)
    show_released: bool = False
    show_archived: bool = False

    def accepts(self, version: RemoteVersion) -> bool:
        if not self.pattern.matches(version.name):
            return False
        if not self.show_released and version.released:
            return False
        if not self.show_archived and version.archived:
            return False
        return True

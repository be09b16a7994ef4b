"""Data models for JIRA sites, jobs and remote version records."""

from __future__ import annotations

from dataclasses import dataclass
from urllib import parse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RemoteVersion(BaseModel):
    """A project version as returned by the JIRA REST API."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    released: bool = False
    archived: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        # JIRA Server returns ids as strings, some proxies as integers.
        if isinstance(value, int):
            return str(value)
        return value


class JiraSiteConfig(BaseModel):
    """Connection settings for one JIRA site."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, description="Name jobs use to reference the site")
    url: str = Field(description="Base URL of the JIRA instance")
    username: str | None = Field(default=None, description="REST API user")
    api_token: str | None = Field(
        default=None, description="Password or API token for the REST user"
    )
    timeout_seconds: float = Field(
        default=30.0, gt=0, description="Socket timeout for REST calls"
    )
    verify_ssl: bool = Field(
        default=True, description="Verify the server certificate on https URLs"
    )

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        parsed = parse.urlparse(value)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError(f"JIRA url must be an http(s) URL, got: {value}")
        return value.rstrip("/")

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and bool(self.api_token)


class JiraGlobalConfig(BaseModel):
    """Globally configured JIRA sites."""

    model_config = ConfigDict(extra="ignore")

    sites: list[JiraSiteConfig] = Field(default_factory=list)

    @field_validator("sites")
    @classmethod
    def _unique_names(cls, value: list[JiraSiteConfig]) -> list[JiraSiteConfig]:
        seen: set[str] = set()
        for site in value:
            if site.name in seen:
                raise ValueError(f"Duplicate JIRA site name: {site.name}")
            seen.add(site.name)
        return value


@dataclass
class JobContext:
    """A job or folder in the hosting system, linked to its parent."""

    name: str
    display_name: str | None = None
    site_name: str | None = None
    parent: JobContext | None = None

    def ancestry(self) -> list[JobContext]:
        """Return this context followed by its ancestors, nearest first."""
        chain: list[JobContext] = []
        node: JobContext | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        return chain

    @property
    def full_display_name(self) -> str:
        names = [node.display_name or node.name for node in reversed(self.ancestry())]
        return " » ".join(names)

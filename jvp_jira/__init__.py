"""JIRA site access: configuration, sessions and version fetching."""

from jvp_jira.api import (
    JiraSite,
    JiraVersionFetcher,
    JobContext,
    RemoteVersion,
    SiteResolver,
    VersionFetcher,
)

__all__ = [
    "JiraSite",
    "JiraVersionFetcher",
    "JobContext",
    "RemoteVersion",
    "SiteResolver",
    "VersionFetcher",
]

"""Public API surface for jvp_jira."""

from jvp_jira.client import JiraClient
from jvp_jira.fetcher import JiraVersionFetcher, VersionFetcher
from jvp_jira.models import JiraGlobalConfig, JiraSiteConfig, JobContext, RemoteVersion
from jvp_jira.session import JiraSession
from jvp_jira.site import (
    JiraSite,
    SiteResolver,
    load_site_resolver,
    load_sites_config,
)

__all__ = [
    "JiraClient",
    "JiraGlobalConfig",
    "JiraSession",
    "JiraSite",
    "JiraSiteConfig",
    "JiraVersionFetcher",
    "JobContext",
    "RemoteVersion",
    "SiteResolver",
    "VersionFetcher",
    "load_site_resolver",
    "load_sites_config",
]

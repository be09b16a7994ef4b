"""JIRA site configuration and resolution from job ancestry."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

import yaml
from pydantic import ValidationError

from jvp_common.errors import ConfigurationError
from jvp_jira.client import JiraClient
from jvp_jira.models import JiraGlobalConfig, JiraSiteConfig, JobContext
from jvp_jira.session import JiraSession


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "JVP_CONFIG"


class JiraSite:
    """A configured JIRA instance able to open sessions."""

    def __init__(self, config: JiraSiteConfig) -> None:
        self.config = config

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def url(self) -> str:
        return self.config.url

    def create_session(self) -> JiraSession | None:
        """Open a session, or return None when remote access isn't configured."""
        if not self.config.has_credentials:
            logger.debug("JIRA site %s has no credentials configured", self.name)
            return None
        client = JiraClient(
            base_url=self.config.url,
            username=self.config.username or "",
            api_token=self.config.api_token or "",
            timeout_seconds=self.config.timeout_seconds,
            verify_ssl=self.config.verify_ssl,
        )
        return JiraSession(client)

    def __repr__(self) -> str:
        return f"JiraSite(name={self.name!r}, url={self.url!r})"


class SiteResolver:
    """Locate the JIRA site that applies to a job."""

    def __init__(self, sites: Iterable[JiraSite] = ()) -> None:
        self._sites: dict[str, JiraSite] = {site.name: site for site in sites}

    @classmethod
    def from_config(cls, config: JiraGlobalConfig) -> "SiteResolver":
        return cls(JiraSite(site) for site in config.sites)

    @property
    def sites(self) -> list[JiraSite]:
        return list(self._sites.values())

    def resolve(self, context: JobContext | None) -> JiraSite | None:
        """Return the site for ``context``.

        The nearest job or folder naming a site wins. Without one, a single
        globally configured site is used as the default.
        """
        if context is not None:
            for node in context.ancestry():
                if node.site_name:
                    site = self._sites.get(node.site_name)
                    if site is None:
                        logger.warning(
                            "Job %s references unknown JIRA site %s",
                            node.name,
                            node.site_name,
                        )
                    return site
        if len(self._sites) == 1:
            return next(iter(self._sites.values()))
        return None


def default_config_path() -> Path | None:
    value = os.environ.get(CONFIG_ENV_VAR)
    if not value:
        return None
    return Path(value).expanduser()


def load_sites_config(path: Path | None = None) -> JiraGlobalConfig:
    """Load the global site configuration from YAML.

    Falls back to ``$JVP_CONFIG``; with neither, no sites are configured.
    """
    resolved = path or default_config_path()
    if resolved is None:
        return JiraGlobalConfig()
    if not resolved.exists():
        raise ConfigurationError(
            f"JIRA configuration file not found: {resolved}",
            context={"path": resolved},
        )
    data = yaml.safe_load(resolved.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "JIRA configuration must contain a mapping at the top level.",
            context={"path": resolved},
        )
    try:
        return JiraGlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid JIRA configuration in {resolved}: {exc}",
            context={"path": resolved},
            cause=exc,
        ) from exc


def load_site_resolver(path: Path | None = None) -> SiteResolver:
    return SiteResolver.from_config(load_sites_config(path))

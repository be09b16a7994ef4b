"""Bridge between parameter definitions and the JIRA versions API."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from jvp_common.errors import ConfigurationError, SessionError
from jvp_jira.models import JobContext, RemoteVersion
from jvp_jira.site import JiraSite


logger = logging.getLogger(__name__)


class VersionFetcher(Protocol):
    """Anything able to list the versions of a project on a site."""

    def fetch_versions(
        self,
        site: JiraSite | None,
        project_key: str,
        *,
        job: JobContext | None = None,
    ) -> Sequence[RemoteVersion]:
        ...


class JiraVersionFetcher:
    """Fetch versions through a real JIRA session.

    Errors are raised as-is: ``ConfigurationError`` when no site applies,
    ``SessionError`` when the site cannot open a session, and
    ``RemoteServiceError`` from the REST call itself.
    """

    def fetch_versions(
        self,
        site: JiraSite | None,
        project_key: str,
        *,
        job: JobContext | None = None,
    ) -> Sequence[RemoteVersion]:
        if site is None:
            where = f"in the project {job.full_display_name}" if job else "for this job"
            raise ConfigurationError(
                f"JIRA site needs to be configured {where}",
                context={"project_key": project_key, "job": job.name if job else None},
            )
        session = site.create_session()
        if session is None:
            raise SessionError(
                "Remote access for JIRA isn't configured",
                context={"site": site.name, "url": site.url},
            )
        logger.debug("Fetching versions of %s from %s", project_key, site.url)
        return session.get_versions(project_key)

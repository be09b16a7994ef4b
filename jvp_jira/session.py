"""Authenticated session against a JIRA site."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from jvp_common.errors import RemoteServiceError
from jvp_jira.client import JiraClient
from jvp_jira.models import RemoteVersion


logger = logging.getLogger(__name__)


class JiraSession:
    """Wraps a :class:`JiraClient` and returns typed records."""

    def __init__(self, client: JiraClient) -> None:
        self.client = client

    def get_versions(self, project_key: str) -> list[RemoteVersion]:
        raw = self.client.get_project_versions(project_key)
        logger.debug("JIRA returned %d versions for %s", len(raw), project_key)
        try:
            return [RemoteVersion.model_validate(item) for item in raw]
        except ValidationError as exc:
            raise RemoteServiceError(
                f"Malformed version record from JIRA: {exc}",
                context={"project_key": project_key},
                cause=exc,
            ) from exc

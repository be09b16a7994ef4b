"""Build parameter whose choices are the versions of a JIRA project."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from jvp_common.errors import ConfigurationError
from jvp_jira.fetcher import JiraVersionFetcher, VersionFetcher
from jvp_jira.models import JobContext, RemoteVersion
from jvp_jira.site import SiteResolver, load_site_resolver
from jvp_params.interface import ParameterDefinition, ParameterValue
from jvp_params.policy import ReleasePattern, SelectionPolicy, format_flag, parse_flag


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateVersion:
    """A version offered to the user."""

    name: str
    id: str

    @classmethod
    def from_remote(cls, version: RemoteVersion) -> "CandidateVersion":
        return cls(name=version.name, id=version.id)


class JiraVersionParameterValue(ParameterValue):
    """The version name picked for a build."""


def compute_candidates(
    records: Iterable[RemoteVersion] | None, policy: SelectionPolicy
) -> list[CandidateVersion]:
    """Sort ``records`` by name and keep those the policy accepts."""
    if records is None:
        return []
    ordered = sorted(records, key=lambda version: version.name)
    return [
        CandidateVersion.from_remote(version)
        for version in ordered
        if policy.accepts(version)
    ]


def _config_text(config: Mapping[str, Any], key: str) -> str | None:
    """Read a text field, turning YAML numbers such as ``123`` into ``"123"``."""
    value = config.get(key)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ConfigurationError(
        f"Parameter field {key!r} must be text, got {type(value).__name__}",
        context={"field": key, "value": value},
    )


class JiraVersionParameterDefinition(ParameterDefinition):
    """Prompts for one of the versions of a JIRA project.

    Policy fields are exposed as strings because that is how job forms bind
    them: ``jira_release_pattern`` is ``""`` when unset and the show flags are
    ``"true"``/``"false"``.
    """

    TYPE_NAME = "jira-version"
    DISPLAY_NAME = "JIRA Release Version Parameter"

    def __init__(
        self,
        name: str,
        description: str | None = None,
        jira_project_key: str | None = None,
        jira_release_pattern: str | None = None,
        jira_show_released: str | None = None,
        jira_show_archived: str | None = None,
        *,
        fetcher: VersionFetcher | None = None,
        sites: SiteResolver | None = None,
    ) -> None:
        super().__init__(name, description)
        self.policy = SelectionPolicy(project_key="")
        self.jira_project_key = jira_project_key
        self.jira_release_pattern = jira_release_pattern
        self.jira_show_released = jira_show_released
        self.jira_show_archived = jira_show_archived
        self._fetcher = fetcher
        self._sites = sites

    @property
    def jira_project_key(self) -> str:
        return self.policy.project_key

    @jira_project_key.setter
    def jira_project_key(self, value: str | None) -> None:
        if value is not None and not isinstance(value, str):
            raise ConfigurationError(
                f"Parameter {self.name} has a non-text JIRA project key",
                context={"parameter": self.name, "value": value},
            )
        key = (value or "").strip()
        if not key:
            raise ConfigurationError(
                f"Parameter {self.name} needs a JIRA project key",
                context={"parameter": self.name},
            )
        self.policy.project_key = key

    @property
    def jira_release_pattern(self) -> str:
        return self.policy.pattern.to_string()

    @jira_release_pattern.setter
    def jira_release_pattern(self, value: str | None) -> None:
        self.policy.pattern = ReleasePattern.from_string(value)

    @property
    def jira_show_released(self) -> str:
        return format_flag(self.policy.show_released)

    @jira_show_released.setter
    def jira_show_released(self, value: str | bool | None) -> None:
        self.policy.show_released = parse_flag(value)

    @property
    def jira_show_archived(self) -> str:
        return format_flag(self.policy.show_archived)

    @jira_show_archived.setter
    def jira_show_archived(self, value: str | bool | None) -> None:
        self.policy.show_archived = parse_flag(value)

    def compute_candidates(
        self, records: Iterable[RemoteVersion] | None
    ) -> list[CandidateVersion]:
        return compute_candidates(records, self.policy)

    def get_versions(self, context: JobContext | None) -> list[CandidateVersion]:
        """Fetch, sort and filter the versions offered for ``context``.

        Nothing is cached: every call reads the site configuration and hits
        JIRA again. Errors from the fetch propagate unchanged.
        """
        sites = self._sites if self._sites is not None else load_site_resolver()
        fetcher = self._fetcher if self._fetcher is not None else JiraVersionFetcher()
        site = sites.resolve(context)
        records = fetcher.fetch_versions(site, self.policy.project_key, job=context)
        candidates = self.compute_candidates(records)
        logger.info(
            "Offering %d of %d versions of %s for parameter %s",
            len(candidates),
            len(records) if records is not None else 0,
            self.policy.project_key,
            self.name,
        )
        return candidates

    def create_value(
        self, values: Mapping[str, Sequence[str] | str]
    ) -> JiraVersionParameterValue | None:
        submitted = values.get(self.name)
        if isinstance(submitted, str):
            submitted = [submitted]
        if submitted is None or len(submitted) != 1:
            return None
        return JiraVersionParameterValue(name=self.name, value=submitted[0])

    def create_value_from_form(
        self, form: Mapping[str, Any]
    ) -> JiraVersionParameterValue:
        # Any submitted string is bound, offered or not.
        data = dict(form)
        data.setdefault("name", self.name)
        return JiraVersionParameterValue.model_validate(data)

    def to_config(self) -> dict[str, str]:
        return {
            "name": self.name,
            "description": self.description,
            "jiraProjectKey": self.jira_project_key,
            "jiraReleasePattern": self.jira_release_pattern,
            "jiraShowReleased": self.jira_show_released,
            "jiraShowArchived": self.jira_show_archived,
        }

    @classmethod
    def from_config(
        cls, config: Mapping[str, Any], **kwargs: Any
    ) -> "JiraVersionParameterDefinition":
        return cls(
            name=_config_text(config, "name") or "",
            description=_config_text(config, "description"),
            jira_project_key=_config_text(config, "jiraProjectKey"),
            jira_release_pattern=_config_text(config, "jiraReleasePattern"),
            jira_show_released=config.get("jiraShowReleased"),
            jira_show_archived=config.get("jiraShowArchived"),
            **kwargs,
        )

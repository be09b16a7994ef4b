"""Build parameter definitions backed by JIRA versions."""

from jvp_params.api import (
    CandidateVersion,
    JiraVersionParameterDefinition,
    JiraVersionParameterValue,
    ParameterRegistry,
    create_registry,
)

__all__ = [
    "CandidateVersion",
    "JiraVersionParameterDefinition",
    "JiraVersionParameterValue",
    "ParameterRegistry",
    "create_registry",
]

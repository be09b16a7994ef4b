"""Public API helpers for parameter definitions and their registry."""

from __future__ import annotations

from jvp_params.builtin import builtin_types
from jvp_params.interface import ParameterDefinition, ParameterValue
from jvp_params.jobs import dump_job_parameters, load_job_parameters
from jvp_params.policy import ReleasePattern, SelectionPolicy, format_flag, parse_flag
from jvp_params.registry import ParameterRegistry
from jvp_params.version_parameter import (
    CandidateVersion,
    JiraVersionParameterDefinition,
    JiraVersionParameterValue,
    compute_candidates,
)


def create_registry() -> ParameterRegistry:
    """Registry holding the built-in types plus any entry-point types."""
    return ParameterRegistry(builtin_types())


__all__ = [
    "CandidateVersion",
    "JiraVersionParameterDefinition",
    "JiraVersionParameterValue",
    "ParameterDefinition",
    "ParameterRegistry",
    "ParameterValue",
    "ReleasePattern",
    "SelectionPolicy",
    "builtin_types",
    "compute_candidates",
    "create_registry",
    "dump_job_parameters",
    "format_flag",
    "load_job_parameters",
    "parse_flag",
]

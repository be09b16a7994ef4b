"""Built-in parameter definition types."""

from __future__ import annotations

from .interface import ParameterDefinition
from .version_parameter import JiraVersionParameterDefinition


def builtin_types() -> list[type[ParameterDefinition]]:
    return [JiraVersionParameterDefinition]

"""Read and write the parameter section of a job definition file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

from jvp_common.errors import ConfigurationError
from .builtin import builtin_types
from .interface import ParameterDefinition
from .registry import ParameterRegistry


logger = logging.getLogger(__name__)


def _default_registry() -> ParameterRegistry:
    return ParameterRegistry(builtin_types())


def load_job_parameters(
    path: Path,
    registry: ParameterRegistry | None = None,
    **kwargs: Any,
) -> list[ParameterDefinition]:
    """
    Load parameter definitions from a job YAML file.

    The file holds a ``parameters`` list; each entry names its ``type`` and
    carries the definition's persisted fields. Extra keyword arguments are
    passed to every definition (e.g. a fetcher or site resolver).
    """
    resolved = registry or _default_registry()
    if not path.exists():
        raise ConfigurationError(f"Job file not found: {path}", context={"path": path})
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Job file must contain a mapping at the top level.", context={"path": path}
        )
    entries = data.get("parameters")
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise ConfigurationError(
            "Job section 'parameters' must be a list.", context={"path": path}
        )

    definitions: list[ParameterDefinition] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigurationError(
                f"Parameter #{index} must be a mapping.", context={"path": path}
            )
        fields = dict(entry)
        type_name = fields.pop("type", None)
        try:
            definition_cls = resolved.get(str(type_name))
        except KeyError as exc:
            raise ConfigurationError(
                f"Unknown parameter type {type_name!r} in {path}",
                context={"path": path, "index": index},
                cause=exc,
            ) from exc
        definitions.append(definition_cls.from_config(fields, **kwargs))
    logger.debug("Loaded %d parameters from %s", len(definitions), path)
    return definitions


def dump_job_parameters(
    definitions: Iterable[ParameterDefinition],
    path: Path,
    registry: ParameterRegistry | None = None,
) -> None:
    """Write definitions to ``path`` in the format read by :func:`load_job_parameters`."""
    resolved = registry or _default_registry()
    entries = [
        {"type": resolved.type_name_for(definition), **definition.to_config()}
        for definition in definitions
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump({"parameters": entries}, sort_keys=False), encoding="utf-8"
    )

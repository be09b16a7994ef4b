"""
Registry of parameter definition types.

Built-in types are registered directly. Third-party types are advertised
under the ``jira_version_param.parameters`` entry-point group and imported
only when first asked for.
"""

from __future__ import annotations

import importlib.metadata
import logging
from inspect import isclass
from typing import Any, Dict, Iterable, Mapping, Optional

from .interface import ParameterDefinition


logger = logging.getLogger(__name__)
ENTRYPOINT_GROUP = "jira_version_param.parameters"


class ParameterRegistry:
    """In-memory registry of built-in and entry-point parameter types."""

    def __init__(self, types: Optional[Iterable[Any]] = None):
        self._types: Dict[str, type[ParameterDefinition]] = {}
        self._advertised: Dict[str, importlib.metadata.EntryPoint] = {}
        if types:
            for definition_cls in types:
                self.register(definition_cls)
        self._collect_advertised_types()

    def register(self, definition_cls: Any) -> None:
        """Register a parameter definition class under its TYPE_NAME."""
        if not (isclass(definition_cls) and issubclass(definition_cls, ParameterDefinition)):
            raise TypeError(f"Unknown parameter type: {definition_cls!r}")
        if not definition_cls.TYPE_NAME:
            raise TypeError(f"{definition_cls.__name__}.TYPE_NAME must be set")
        self._types[definition_cls.TYPE_NAME] = definition_cls

    def get(self, type_name: str) -> type[ParameterDefinition]:
        if type_name not in self._types and type_name in self._advertised:
            self._import_advertised(type_name)
        if type_name not in self._types:
            raise KeyError(f"Parameter type '{type_name}' not found")
        return self._types[type_name]

    def create(
        self, type_name: str, config: Mapping[str, Any], **kwargs: Any
    ) -> ParameterDefinition:
        """Instantiate a definition of ``type_name`` from persisted fields."""
        return self.get(type_name).from_config(config, **kwargs)

    def type_name_for(self, definition: ParameterDefinition) -> str:
        for name, definition_cls in self._types.items():
            if type(definition) is definition_cls:
                return name
        raise KeyError(f"Parameter type for {type(definition).__name__} not registered")

    def available(self, load_entrypoints: bool = False) -> Dict[str, type[ParameterDefinition]]:
        """
        Return available parameter types.

        When load_entrypoints is True, every advertised type is imported and
        registered first; otherwise only already-registered types are returned.
        """
        if load_entrypoints:
            for type_name in list(self._advertised):
                self._import_advertised(type_name)
        return dict(self._types)

    def display_names(self, load_entrypoints: bool = False) -> Dict[str, str]:
        return {
            name: definition_cls.DISPLAY_NAME or name
            for name, definition_cls in self.available(load_entrypoints).items()
        }

    def _collect_advertised_types(self) -> None:
        try:
            entry_points = importlib.metadata.entry_points().select(group=ENTRYPOINT_GROUP)
        except Exception as exc:
            logger.debug("Cannot list %s entry points: %s", ENTRYPOINT_GROUP, exc)
            return
        for entry_point in entry_points:
            # Directly registered types shadow installed ones of the same name.
            if entry_point.name not in self._types:
                self._advertised.setdefault(entry_point.name, entry_point)

    def _import_advertised(self, type_name: str) -> None:
        entry_point = self._advertised.pop(type_name, None)
        if entry_point is None:
            return
        try:
            self.register(entry_point.load())
        except ImportError as exc:
            logger.debug(
                "Skipping parameter entry point %s, missing dependency: %s",
                type_name,
                exc,
            )
        except Exception as exc:
            logger.warning("Failed to load parameter entry point %s: %s", type_name, exc)

"""Base types for build parameter definitions and their values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

from jvp_common.errors import ConfigurationError


class ParameterValue(BaseModel):
    """A value chosen for a build parameter at submission time."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(min_length=1, description="Parameter name")
    value: str = Field(description="Submitted value, carried through the build")


class ParameterDefinition(ABC):
    """
    Abstract base class for build parameter definitions.

    A definition encapsulates:
    1. Configuration (persisted with the job)
    2. Value creation from submitted forms
    3. Metadata (type name, display name, description)
    """

    TYPE_NAME: ClassVar[str] = ""
    DISPLAY_NAME: ClassVar[str] = ""

    def __init__(self, name: str, description: str | None = None) -> None:
        if not isinstance(name, str) or not name:
            raise ConfigurationError(
                "Parameter name must be a non-empty string",
                context={"name": name},
            )
        self.name = name
        self.description = description or ""

    @abstractmethod
    def create_value(
        self, values: Mapping[str, Sequence[str] | str]
    ) -> ParameterValue | None:
        """
        Build a value from raw request parameters.

        Returns None when the request doesn't carry a usable value for this
        parameter; callers skip the parameter in that case.
        """

    @abstractmethod
    def create_value_from_form(self, form: Mapping[str, Any]) -> ParameterValue:
        """Bind a structured form submission into a value."""

    @abstractmethod
    def to_config(self) -> dict[str, str]:
        """Return the persisted configuration as plain named fields."""

    @classmethod
    @abstractmethod
    def from_config(
        cls, config: Mapping[str, Any], **kwargs: Any
    ) -> "ParameterDefinition":
        """Rebuild a definition from :meth:`to_config` output."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

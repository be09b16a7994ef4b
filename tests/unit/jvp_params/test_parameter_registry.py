"""Tests for the parameter type registry."""

from __future__ import annotations

import importlib.metadata

import pytest

from jvp_params.api import create_registry
from jvp_params.interface import ParameterDefinition, ParameterValue
from jvp_params.registry import ParameterRegistry
from jvp_params.version_parameter import JiraVersionParameterDefinition


pytestmark = pytest.mark.unit_params


class StringParameterDefinition(ParameterDefinition):
    TYPE_NAME = "string"
    DISPLAY_NAME = "String Parameter"

    def create_value(self, values):
        submitted = values.get(self.name) or []
        return ParameterValue(name=self.name, value=submitted[0]) if submitted else None

    def create_value_from_form(self, form):
        return ParameterValue.model_validate(form)

    def to_config(self):
        return {"name": self.name, "description": self.description}

    @classmethod
    def from_config(cls, config, **kwargs):
        return cls(config["name"], config.get("description"))


@pytest.fixture(autouse=True)
def no_installed_entrypoints(monkeypatch):
    class NoEntries:
        def select(self, group):
            return []

    monkeypatch.setattr(importlib.metadata, "entry_points", lambda: NoEntries())


def test_builtin_registry_exposes_display_name() -> None:
    registry = create_registry()
    assert registry.get("jira-version") is JiraVersionParameterDefinition
    assert registry.display_names() == {"jira-version": "JIRA Release Version Parameter"}


def test_registry_creates_definitions_from_config() -> None:
    registry = ParameterRegistry([JiraVersionParameterDefinition, StringParameterDefinition])

    definition = registry.create(
        "jira-version", {"name": "VERSION", "jiraProjectKey": "ABC", "jiraShowReleased": "true"}
    )

    assert isinstance(definition, JiraVersionParameterDefinition)
    assert definition.jira_show_released == "true"
    assert registry.type_name_for(definition) == "jira-version"
    assert registry.type_name_for(StringParameterDefinition("S")) == "string"


def test_registry_rejects_unknown_objects() -> None:
    registry = ParameterRegistry()
    with pytest.raises(TypeError):
        registry.register(object())
    with pytest.raises(KeyError):
        registry.get("missing")


def test_registry_loads_entrypoint_types_lazily(monkeypatch) -> None:
    class FakeEntryPoint:
        name = "string"

        def load(self):
            return StringParameterDefinition

    class FakeEntries:
        def select(self, group):
            assert group == "jira_version_param.parameters"
            return [FakeEntryPoint()]

    monkeypatch.setattr(importlib.metadata, "entry_points", lambda: FakeEntries())

    registry = ParameterRegistry([JiraVersionParameterDefinition])
    assert "string" not in registry.available()
    assert registry.get("string") is StringParameterDefinition


def test_registry_logs_entrypoint_failures(monkeypatch, caplog) -> None:
    class BrokenEntryPoint:
        name = "broken"

        def load(self):
            raise RuntimeError("boom")

    class FakeEntries:
        def select(self, group):
            return [BrokenEntryPoint()]

    monkeypatch.setattr(importlib.metadata, "entry_points", lambda: FakeEntries())

    caplog.set_level("WARNING")
    registry = ParameterRegistry()
    assert registry.available(load_entrypoints=True) == {}
    assert any("Failed to load parameter entry point" in m for m in caplog.messages)


def test_registry_tolerates_unreadable_entrypoints(monkeypatch) -> None:
    def raise_error():
        raise RuntimeError("boom")

    monkeypatch.setattr(importlib.metadata, "entry_points", raise_error)

    registry = ParameterRegistry([JiraVersionParameterDefinition])
    assert list(registry.available(load_entrypoints=True)) == ["jira-version"]


def test_registered_type_shadows_installed_entrypoint(monkeypatch) -> None:
    class ShadowedEntryPoint:
        name = "jira-version"

        def load(self):
            raise AssertionError("must not be imported")

    class FakeEntries:
        def select(self, group):
            return [ShadowedEntryPoint()]

    monkeypatch.setattr(importlib.metadata, "entry_points", lambda: FakeEntries())

    registry = ParameterRegistry([JiraVersionParameterDefinition])
    assert registry.available(load_entrypoints=True) == {
        "jira-version": JiraVersionParameterDefinition
    }

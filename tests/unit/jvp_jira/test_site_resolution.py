"""Tests for site configuration loading and ancestry resolution."""

from __future__ import annotations

import pytest

from jvp_common.errors import ConfigurationError
from jvp_jira.models import JiraSiteConfig, JobContext
from jvp_jira.session import JiraSession
from jvp_jira.site import JiraSite, SiteResolver, load_site_resolver, load_sites_config


pytestmark = pytest.mark.unit_jira


def _site(name: str, **kwargs) -> JiraSite:
    return JiraSite(JiraSiteConfig(name=name, url=f"https://{name}.example.com", **kwargs))


def test_nearest_ancestor_site_wins() -> None:
    resolver = SiteResolver([_site("a"), _site("b")])
    folder = JobContext(name="team", site_name="a")
    job = JobContext(name="build", parent=JobContext(name="sub", site_name="b", parent=folder))

    assert resolver.resolve(job).name == "b"
    assert resolver.resolve(folder).name == "a"


def test_single_site_is_the_default() -> None:
    resolver = SiteResolver([_site("only")])

    assert resolver.resolve(JobContext(name="build")).name == "only"
    assert resolver.resolve(None).name == "only"


def test_no_site_when_ambiguous_or_unknown() -> None:
    resolver = SiteResolver([_site("a"), _site("b")])

    assert resolver.resolve(JobContext(name="build")) is None
    assert resolver.resolve(JobContext(name="build", site_name="missing")) is None
    assert SiteResolver().resolve(JobContext(name="build")) is None


def test_full_display_name_joins_ancestry() -> None:
    job = JobContext(name="build", parent=JobContext(name="team", display_name="Team X"))
    assert job.full_display_name == "Team X » build"


def test_create_session_requires_credentials() -> None:
    assert _site("anon").create_session() is None
    assert _site("half", username="u").create_session() is None
    session = _site("full", username="u", api_token="t", timeout_seconds=5).create_session()
    assert isinstance(session, JiraSession)
    assert session.client.base_url == "https://full.example.com"
    assert session.client.timeout_seconds == 5
    assert session.client.verify_ssl is True


def test_verify_ssl_reaches_the_client(tmp_path) -> None:
    path = tmp_path / "sites.yaml"
    path.write_text(
        "sites:\n"
        "  - name: internal\n"
        "    url: https://jira.internal\n"
        "    username: builder\n"
        "    api_token: secret\n"
        "    verify_ssl: false\n",
        encoding="utf-8",
    )

    (site,) = load_site_resolver(path).sites
    session = site.create_session()

    assert session.client.verify_ssl is False


def test_load_sites_config_from_yaml(tmp_path) -> None:
    path = tmp_path / "sites.yaml"
    path.write_text(
        "sites:\n"
        "  - name: main\n"
        "    url: https://jira.example.com/\n"
        "    username: builder\n"
        "    api_token: secret\n",
        encoding="utf-8",
    )

    config = load_sites_config(path)

    assert config.sites[0].url == "https://jira.example.com"
    assert config.sites[0].has_credentials


def test_load_site_resolver_uses_env(tmp_path, monkeypatch) -> None:
    path = tmp_path / "sites.yaml"
    path.write_text("sites:\n  - name: env\n    url: http://jira.local\n", encoding="utf-8")
    monkeypatch.setenv("JVP_CONFIG", str(path))

    resolver = load_site_resolver()

    assert [site.name for site in resolver.sites] == ["env"]


def test_no_config_means_no_sites(monkeypatch) -> None:
    monkeypatch.delenv("JVP_CONFIG", raising=False)
    assert load_sites_config().sites == []


@pytest.mark.parametrize(
    "content",
    [
        "- just a list\n",
        "sites:\n  - name: bad\n    url: not-a-url\n",
        "sites:\n  - {name: a, url: 'http://a'}\n  - {name: a, url: 'http://b'}\n",
    ],
)
def test_invalid_config_raises_configuration_error(tmp_path, content) -> None:
    path = tmp_path / "sites.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_sites_config(path)


def test_missing_config_file_raises(tmp_path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_sites_config(tmp_path / "nope.yaml")

from collections import defaultdict
from typing import Sequence

import pytest
from rich.console import Console
from rich.table import Table

from jvp_jira.models import JiraSiteConfig, RemoteVersion
from jvp_jira.site import JiraSite, SiteResolver


KNOWN_MARKERS = {"unit_common", "unit_jira", "unit_params", "unit_ui"}


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print statistics by marker at the end of the test session."""
    _ = (exitstatus, config)
    marker_stats = defaultdict(
        lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0, "duration": 0.0}
    )

    for outcome in ["passed", "failed", "skipped"]:
        for report in terminalreporter.stats.get(outcome, []):
            # Only count the actual test call, or setup skips
            if report.when == "call" or (report.when == "setup" and report.outcome == "skipped"):
                duration = getattr(report, "duration", 0.0)
                for marker in KNOWN_MARKERS:
                    if marker in report.keywords:
                        stats = marker_stats[marker]
                        stats[outcome] += 1
                        stats["total"] += 1
                        stats["duration"] += duration

    if not marker_stats:
        return

    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Duration (s)", justify="right", style="blue")

    for marker in sorted(marker_stats):
        stats = marker_stats[marker]
        table.add_row(
            marker,
            str(stats["total"]),
            str(stats["passed"]),
            str(stats["failed"]),
            str(stats["skipped"]),
            f"{stats['duration']:.2f}",
        )

    console = Console()
    console.print("\n")
    console.print(table)


class FakeFetcher:
    """VersionFetcher returning canned records and remembering its calls."""

    def __init__(self, records: Sequence[RemoteVersion] | None = None, error: Exception | None = None):
        self.records = records
        self.error = error
        self.calls: list[tuple[object, str]] = []
        self.jobs: list[object] = []

    def fetch_versions(self, site, project_key, *, job=None):
        self.calls.append((site, project_key))
        self.jobs.append(job)
        if self.error is not None:
            raise self.error
        return self.records


@pytest.fixture
def sample_versions() -> list[RemoteVersion]:
    return [
        RemoteVersion(id="3", name="2.0", released=True, archived=False),
        RemoteVersion(id="1", name="1.0", released=False, archived=False),
        RemoteVersion(id="2", name="1.5-rc", released=False, archived=True),
    ]


@pytest.fixture
def fake_fetcher(sample_versions):
    return FakeFetcher(sample_versions)


@pytest.fixture
def site_config() -> JiraSiteConfig:
    return JiraSiteConfig(
        name="main",
        url="https://jira.example.com/",
        username="builder",
        api_token="secret",
    )


@pytest.fixture
def single_site(site_config) -> SiteResolver:
    return SiteResolver([JiraSite(site_config)])


@pytest.fixture
def make_fetcher():
    return FakeFetcher

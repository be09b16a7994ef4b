"""
Command-line interface for jira-version-param.

Renders the version choices a job parameter would offer, and lists the
registered parameter types.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from jvp_common.errors import JVPError
from jvp_common.logging import configure_logging
from jvp_jira.api import JobContext, load_site_resolver
from jvp_params.api import (
    CandidateVersion,
    JiraVersionParameterDefinition,
    create_registry,
    load_job_parameters,
)


console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    help="Inspect JIRA version parameters and the versions they offer.",
    no_args_is_help=True,
)


@app.callback()
def entry(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    log_json: bool = typer.Option(False, "--log-json", help="Emit logs as JSON."),
) -> None:
    """Global options."""
    configure_logging(debug=debug, json=log_json or None, force=True)


def _fail(exc: JVPError, as_json: bool = False) -> typer.Exit:
    if as_json:
        typer.echo(json.dumps({"error": exc.to_dict()}, indent=2), err=True)
    else:
        err_console.print(f"[bold red]{exc.error_type}:[/bold red] {exc}")
    return typer.Exit(1)


def _render_candidates(
    title: str, candidates: list[CandidateVersion], as_json: bool
) -> None:
    if as_json:
        payload = [{"name": c.name, "id": c.id} for c in candidates]
        typer.echo(json.dumps(payload, indent=2))
        return
    if not candidates:
        console.print(f"[yellow]{title}: no matching versions.[/yellow]")
        return
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Version", style="cyan")
    table.add_column("ID", justify="right")
    for candidate in candidates:
        table.add_row(candidate.name, candidate.id)
    console.print(table)


@app.command("versions")
def versions(
    project_key: str = typer.Argument(..., help="JIRA project key, e.g. ABC."),
    sites: Optional[Path] = typer.Option(
        None, "--sites", "-s", help="YAML file listing JIRA sites (default: $JVP_CONFIG)."
    ),
    site: Optional[str] = typer.Option(
        None, "--site", help="Site name to use when several are configured."
    ),
    pattern: str = typer.Option(
        "", "--pattern", "-p", help="Regex version names must fully match."
    ),
    show_released: bool = typer.Option(
        False, "--show-released", help="Include released versions."
    ),
    show_archived: bool = typer.Option(
        False, "--show-archived", help="Include archived versions."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
) -> None:
    """Show the versions a parameter with these settings would offer."""
    try:
        definition = JiraVersionParameterDefinition(
            name="VERSION",
            jira_project_key=project_key,
            jira_release_pattern=pattern,
            jira_show_released=str(show_released).lower(),
            jira_show_archived=str(show_archived).lower(),
            sites=load_site_resolver(sites),
        )
        candidates = definition.get_versions(JobContext(name="cli", site_name=site))
    except JVPError as exc:
        raise _fail(exc, as_json) from exc
    _render_candidates(f"Versions of {project_key}", candidates, as_json)


@app.command("job")
def job(
    job_file: Path = typer.Argument(..., help="Job YAML file with a 'parameters' list."),
    sites: Optional[Path] = typer.Option(
        None, "--sites", "-s", help="YAML file listing JIRA sites (default: $JVP_CONFIG)."
    ),
    site: Optional[str] = typer.Option(
        None, "--site", help="Site the job is bound to."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables."),
) -> None:
    """Render the choices of every JIRA version parameter of a job."""
    try:
        resolver = load_site_resolver(sites)
        definitions = load_job_parameters(job_file, sites=resolver)
        context = JobContext(name=job_file.stem, site_name=site)
        for definition in definitions:
            if not isinstance(definition, JiraVersionParameterDefinition):
                continue
            candidates = definition.get_versions(context)
            _render_candidates(definition.name, candidates, as_json)
    except JVPError as exc:
        raise _fail(exc, as_json) from exc


@app.command("parameters")
def parameters() -> None:
    """List the registered parameter types."""
    registry = create_registry()
    table = Table(title="Parameter Types", show_header=True, header_style="bold magenta")
    table.add_column("Type", style="cyan")
    table.add_column("Display name")
    for type_name, display_name in sorted(
        registry.display_names(load_entrypoints=True).items()
    ):
        table.add_row(type_name, display_name)
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()

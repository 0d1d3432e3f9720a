"""Typer CLI entry point for the pom verifier."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from pom_verifier.config import VerifierPolicy
from pom_verifier.exceptions import PomNotFoundError, PomParseError, PomVerifierError
from pom_verifier.messages import (
    INVALID_POM,
    MISSING_POM_XML,
    MessageSet,
    VerificationMessage,
    has_required,
)
from pom_verifier.models import SubmissionContext
from pom_verifier.parser import parse_manifest
from pom_verifier.render import build_message_table
from pom_verifier.sources import LocalSourceRepository
from pom_verifier.verifier import MavenVerifier

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Check a Maven pom.xml against the plugin hosting policy.")
console = Console()


@app.callback()
def _configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _report(messages: MessageSet, title: str) -> None:
    if not messages:
        console.print(f"[green]No issues found[/green] for {escape(title)}.")
        return
    console.print(build_message_table(messages, title=escape(title)))
    if has_required(messages):
        raise typer.Exit(code=1)


@app.command()
def verify(
    path: Annotated[Path, typer.Argument(help="A pom.xml file, or a directory containing one.")],
    repo_name: Annotated[
        Optional[str], typer.Option("--repo-name", help="Requested name of the hosted repository.")
    ] = None,
) -> None:
    """Verify a local pom.xml."""
    try:
        policy = VerifierPolicy.from_env()
    except PomVerifierError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from None

    pom = path / policy.manifest_path if path.is_dir() else path
    messages: MessageSet = set()
    try:
        manifest = parse_manifest(pom)
    except PomNotFoundError:
        messages.add(VerificationMessage.warning(MISSING_POM_XML))
    except PomParseError as exc:
        logger.info("%s", exc)
        messages.add(VerificationMessage.required(INVALID_POM))
    else:
        context = SubmissionContext(desired_repository_name=repo_name)
        MavenVerifier(policy=policy).verify(manifest, context, messages)
    _report(messages, str(pom))


@app.command()
def check(
    fork: Annotated[str, typer.Argument(help="Source repository: owner/repo or a GitHub URL.")],
    repo_name: Annotated[
        Optional[str], typer.Option("--repo-name", help="Requested name of the hosted repository.")
    ] = None,
    local: Annotated[
        Optional[Path],
        typer.Option("--local", help="Read files from this checkout instead of GitHub."),
    ] = None,
) -> None:
    """Run the full submission check for a fork."""
    try:
        policy = VerifierPolicy.from_env()
        if local is not None:
            verifier = MavenVerifier(policy=policy, source_factory=lambda _fork: LocalSourceRepository(local))
        else:
            verifier = MavenVerifier(policy=policy)
        context = SubmissionContext(desired_repository_name=repo_name, source_fork=fork)
        messages = verifier.verify_submission(context)
    except PomVerifierError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from None
    _report(messages, fork)


@app.command("policy")
def show_policy() -> None:
    """Show the effective hosting policy."""
    try:
        values = VerifierPolicy.from_env().to_dict()
    except PomVerifierError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from None

    table = Table(title="Hosting policy")
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in values.items():
        table.add_row(key, value)
    console.print(table)


def main() -> None:
    """Console-script entry point."""
    app()

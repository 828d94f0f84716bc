# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application for inspecting and normalizing dependency documents."""

from __future__ import annotations

from pathlib import Path

import typer

from ..config import load_config
from ..engine.session import BuildSession
from ..errors import ResolveError
from ..project import Project
from ..resolvers.registry import ResolverRegistry
from ..store.document import PersistenceStore
from .shared import CLIError, CLILogger, build_cli_logger

app = typer.Typer(help="Inspect and maintain persisted dependency resolution state.", no_args_is_help=True)


def _fail(logger: CLILogger, exc: ResolveError | OSError) -> typer.Exit:
    """Report ``exc`` and return the exit signal for the command."""

    error = CLIError(str(exc))
    logger.fail(str(error))
    return typer.Exit(code=error.exit_code)


@app.command("show")
def show(
    project_name: str = typer.Argument(..., metavar="PROJECT", help="Qualified project name, e.g. 'container:foo'."),
    root: Path = typer.Option(Path("."), "--root", help="Directory holding the dependency document."),
    resolver_ids: list[str] | None = typer.Option(None, "--resolver", "-r", help="Restrict output to resolver ids."),
    debug: bool = typer.Option(False, "--debug", help="Log reads and registry activity."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji output."),
) -> None:
    """Print the persisted dependency closure of a project per resolver."""

    logger = build_cli_logger(emoji=not no_emoji, debug=debug)
    try:
        session = BuildSession.from_document(root)
        project = session.project(project_name)
        dependency_set = project.dependency_set
    except (ResolveError, OSError) as exc:
        raise _fail(logger, exc) from exc

    selected = resolver_ids or sorted(dependency_set.resolvers)
    logger.debug(f"project={project.name} resolvers={','.join(selected)}")
    for resolver_id in selected:
        logger.echo(f"{resolver_id}:")
        for value in project.dependencies(resolver_id):
            if isinstance(value, Project):
                logger.echo(f"  project {value.name}")
            else:
                logger.echo(f"  {value}")


@app.command("check")
def check(
    root: Path = typer.Option(Path("."), "--root", help="Directory holding the dependency document."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji output."),
) -> None:
    """Exit with status 1 when the dependency document is not in canonical form."""

    logger = build_cli_logger(emoji=not no_emoji)
    try:
        store = PersistenceStore(load_config(root))
        canonical = store.is_canonical(root)
    except (ResolveError, OSError) as exc:
        raise _fail(logger, exc) from exc
    path = store.document_path(root)
    if not canonical:
        logger.fail(f"{path} is not normalized; run 'resolvekit normalize'")
        raise typer.Exit(code=1)
    logger.ok(f"{path} is normalized")


@app.command("normalize")
def normalize(
    root: Path = typer.Option(Path("."), "--root", help="Directory holding the dependency document."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji output."),
) -> None:
    """Rewrite the dependency document with sorted keys and lists."""

    logger = build_cli_logger(emoji=not no_emoji)
    try:
        path = PersistenceStore(load_config(root)).normalize(root)
    except (ResolveError, OSError) as exc:
        raise _fail(logger, exc) from exc
    logger.ok(f"normalized {path}")


@app.command("resolvers")
def resolvers() -> None:
    """List the resolver strategies registered for builds."""

    for kind in ResolverRegistry.default():
        typer.echo(f"{kind.id}\t{kind.__module__}.{kind.__qualname__}")


def main() -> None:
    """Run the CLI application."""

    app()


__all__ = ["app", "main"]

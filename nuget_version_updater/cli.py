"""Typer-based CLI for the NuGet version updater."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__, config
from .console import configure_logging
from .errors import ConfigurationError
from .models import UpdateRequest
from .session import UpdateSession

console = Console()

app = typer.Typer(
    help="📦 NuGet Version Updater — point Visual Studio projects at a specific NuGet package version.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def about_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"NuGet Version Updater v{__version__}")
        raise typer.Exit()


def _write_progress(text: str) -> None:
    console.out(text, end="", highlight=False)


@app.command()
def update(
    directory: Path = typer.Argument(
        Path("."),
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory to search for .csproj, .vbproj and packages.config files.",
    ),
    package: str = typer.Option(..., "--package", "-p", help="NuGet package name (case-insensitive)."),
    version: str = typer.Option(..., "--version", "-V", help="Package version to reference, e.g. 1.2.0."),
    recurse: bool = typer.Option(False, "--recurse", "-s", help="Also search subdirectories."),
    apply: bool = typer.Option(False, "--apply", help="Save changes; without it only a preview is shown."),
    rollback: bool = typer.Option(False, "--rollback", help="Downgrade references that are newer than --version."),
    verbose: bool = typer.Option(False, "--verbose", help="Show every project file processed."),
    about: Optional[bool] = typer.Option(
        None,
        "--about",
        help="Show program version and exit.",
        callback=about_callback,
        is_eager=True,
    ),
):
    """🔄 Update the referenced version of a NuGet package.

    By default no files are changed; add --apply to save the updates.

    Example:
      nuget-version-updater . --package PRISM-Library --version 2.4.93
      nuget-version-updater src -s -p PRISM-Library -V 2.4.93 --apply
    """
    if not package.strip():
        raise typer.BadParameter("NuGet package name must not be blank.", param_hint="'--package'")

    configure_logging(console)

    request = UpdateRequest(
        package_name=package.strip(),
        package_version=version,
        rollback=rollback,
        preview=not apply,
        verbose=verbose,
    )
    session = UpdateSession(request, write=_write_progress)

    try:
        success = session.run(directory, recurse=recurse)
    except ConfigurationError as exc:
        console.print(f"[red]✗[/red] {escape(str(exc))}")
        raise typer.Exit(code=config.EXIT_USAGE)

    summary = session.summary
    if not success:
        console.print("\n[red]✗[/red] Search finished with errors; see the messages above")
        raise typer.Exit(code=config.EXIT_SCAN_FAILED)

    console.print("\nSearch complete")
    action = "would update" if request.preview else "updated"
    console.print(
        f"[dim]Examined {summary.files_examined} file(s); "
        f"{summary.files_matched} reference {escape(request.package_name)}; "
        f"{action} {summary.declarations_changed} reference(s) in {summary.files_changed} file(s)[/dim]",
        soft_wrap=True,
    )
    if request.preview and summary.declarations_changed:
        console.print("[yellow]Preview only[/yellow] — use --apply to save changes")


if __name__ == "__main__":
    app()

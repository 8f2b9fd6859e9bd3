"""RuleKit command-line interface."""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .emitters import available_emitters
from .exceptions import RuleKitError
from .installer import Installer
from .logging import configure_logging
from .models import InstallReport, InstallTarget, Role
from .registry import SectionRegistry

app = typer.Typer(
    name="rulekit",
    help="RuleKit: install documentation sections as AI assistant rules",
    add_completion=False,
)
console = Console()


def _get_version_string() -> str:
    try:
        return get_version("rulekit")
    except PackageNotFoundError:
        return __version__


def _print_version(value: bool) -> None:
    if not value:
        return
    console.print(f"RuleKit version {_get_version_string()}")
    raise typer.Exit


@app.callback()
def root(
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Print the installed version and exit",
    ),
) -> None:
    """RuleKit: install documentation sections as AI assistant rules."""


def _parse_choices(raw: str) -> list[int]:
    """Parse a comma-separated list of menu numbers, ignoring junk entries."""
    choices = []
    for part in raw.split(","):
        part = part.strip()
        if part.isdigit():
            choices.append(int(part))
    return choices


def _prompt_target() -> Path:
    answer = typer.prompt("Where to install?", default=".", show_default=True)
    return Path.cwd() / answer


def _prompt_sections(registry: SectionRegistry) -> list[str]:
    sections = registry.discover()
    if not sections:
        console.print(f"[red]Error:[/red] No sections found in {registry.root}")
        raise typer.Exit(1)

    console.print("\n[bold]Available sections:[/bold]")
    for i, section in enumerate(sections, start=1):
        console.print(f"  [cyan]{i})[/cyan] {section.title} — [dim]{section.description}[/dim]")
    all_choice = len(sections) + 1
    console.print(f"  [cyan]{all_choice})[/cyan] All")

    answer = typer.prompt(f"\nWhich sections? (1-{all_choice}, comma-separated)")
    choices = _parse_choices(answer)
    if all_choice in choices:
        return [s.id for s in sections]
    return [sections[n - 1].id for n in choices if 1 <= n <= len(sections)]


def _prompt_ide() -> str:
    emitters = available_emitters()
    names = list(emitters)

    console.print("\n[bold]Target IDE:[/bold]")
    for i, name in enumerate(names, start=1):
        console.print(f"  [cyan]{i})[/cyan] {emitters[name]}")

    answer = typer.prompt(f"\nWhich IDE? (1-{len(names)})")
    choices = _parse_choices(answer)
    if len(choices) != 1 or not 1 <= choices[0] <= len(names):
        console.print("[red]Error:[/red] Invalid IDE selection.")
        raise typer.Exit(1)
    return names[choices[0] - 1]


def _print_report(report: InstallReport) -> None:
    root = report.target.root
    for result in report.sections:
        console.print(f"\n[bold]{result.section_id}[/bold]")
        for file_result in result.files:
            try:
                shown = file_result.path.relative_to(root).as_posix()
            except ValueError:
                shown = str(file_result.path)
            if file_result.error:
                console.print(f"  [red]✗[/red] [dim]{shown}[/dim] {escape(file_result.error)}")
                continue
            marker = "[green]✓[/green]" if file_result.written else "[blue]•[/blue]"
            note = ""
            if file_result.glob:
                note = f" [dim](auto-attached on {escape(file_result.glob)})[/dim]"
            elif file_result.role == Role.INDEX:
                note = " [dim](manual)[/dim]"
            console.print(f"  {marker} [dim]{shown}[/dim]{note}")
        for warning in result.warnings:
            console.print(f"  [yellow]![/yellow] {escape(warning.source)}: {escape(warning.message)}")
        if not result.ok:
            console.print(f"  [red]✗ {result.section_id}:[/red] {escape(result.error or '')}")


@app.command()
def install(
    target: Path | None = typer.Option(
        None,
        "--target",
        "-t",
        help="Directory to install into (prompted when omitted)",
    ),
    section: list[str] | None = typer.Option(
        None,
        "--section",
        "-s",
        help="Section to install (can be repeated)",
    ),
    all_sections: bool = typer.Option(
        False,
        "--all",
        help="Install every available section",
    ),
    ide: str | None = typer.Option(
        None,
        "--ide",
        "-i",
        help="Target format (cursor, copilot)",
    ),
    apply_to: str | None = typer.Option(
        None,
        "--apply-to",
        help="Path matcher for Copilot instruction files",
    ),
    sections_dir: Path | None = typer.Option(
        None,
        "--sections-dir",
        envvar="RULEKIT_SECTIONS_DIR",
        help="Directory holding section content (defaults to bundled sections)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be written without writing files",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Install documentation sections as rules for an AI coding assistant.

    Options that are not supplied are asked for interactively.
    """
    configure_logging(verbose=verbose)
    registry = SectionRegistry(sections_dir)

    try:
        if target is None:
            target = _prompt_target()
        target = target.expanduser().resolve()
        if not target.is_dir():
            console.print(f"[red]Error:[/red] Directory not found: {target}")
            raise typer.Exit(1)

        if all_sections:
            section_ids = registry.section_ids()
        elif section:
            section_ids = list(section)
        else:
            section_ids = _prompt_sections(registry)

        if not section_ids:
            console.print("[red]Error:[/red] No sections selected.")
            raise typer.Exit(1)

        if ide is None:
            ide = _prompt_ide()

        console.print(f"\n[green]✓[/green] Sections: {', '.join(section_ids)}")
        console.print(f"[green]✓[/green] IDE: {available_emitters().get(ide, ide)}")
        if dry_run:
            console.print("\n[bold blue]Dry run - planned files:[/bold blue]")
        else:
            console.print("\n[bold]Installing...[/bold]")

        report = Installer(registry).run(
            InstallTarget(root=target, emitter=ide),
            section_ids,
            dry_run=dry_run,
            emitter_options={"apply_to": apply_to},
        )
    except RuleKitError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    _print_report(report)

    if not report.ok:
        failed = [s.section_id for s in report.sections if not s.ok]
        console.print(f"\n[red]Failed sections:[/red] {', '.join(failed)}")
        raise typer.Exit(1)

    if not dry_run:
        console.print("\n[green][bold]✓ Done![/bold][/green]")
        console.print(f"[dim]Rules installed in {report.target.root}[/dim]")


@app.command("list")
def list_sections(
    sections_dir: Path | None = typer.Option(
        None,
        "--sections-dir",
        envvar="RULEKIT_SECTIONS_DIR",
        help="Directory holding section content (defaults to bundled sections)",
    ),
) -> None:
    """List available sections and target formats."""
    registry = SectionRegistry(sections_dir)

    try:
        sections = registry.discover()
    except RuleKitError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    table = Table(title="Sections")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Description", style="dim")
    table.add_column("Default glob")
    for item in sections:
        table.add_row(item.id, item.title, item.description, item.config.globs or "-")
    console.print(table)

    emitter_table = Table(title="Target formats")
    emitter_table.add_column("ID", style="cyan")
    emitter_table.add_column("Name")
    for name, label in available_emitters().items():
        emitter_table.add_row(name, label)
    console.print(emitter_table)


@app.command()
def version() -> None:
    """Show RuleKit version."""
    console.print(f"RuleKit version {_get_version_string()}")


def main() -> None:
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()

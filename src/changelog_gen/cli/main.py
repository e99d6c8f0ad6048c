"""Main CLI interface for changelog-gen."""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from changelog_gen.config import (
    CONFIG_FILENAME,
    init_config,
    load_config,
    validate_existing_config,
)
from changelog_gen.core.generator import ChangelogGenerator
from changelog_gen.errors import ChangelogError
from changelog_gen.logging import configure_logging
from changelog_gen.models.entry import LatestEntry

console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> None:
    """Print an error to stderr and exit with status 1."""
    err_console.print(f"[red]Error: {escape(message)}[/red]", highlight=False)
    sys.exit(1)


@click.group()
@click.version_option(package_name="changelog-gen")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """changelog-gen - build CHANGELOG.md incrementally from git history."""
    configure_logging(verbose=verbose)


@main.command()
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.option("--force", "-f", is_flag=True, help="Write a section even with no new commits")
@click.option("--preview", "-p", is_flag=True, help="Show the new section without writing it")
@click.option(
    "--project-path",
    help="Only include commits touching this path (for monorepos)",
)
def generate(path: Optional[str], force: bool, preview: bool, project_path: Optional[str]):
    """Prepend a section for new commits to the changelog."""
    project_root = Path(path or ".").resolve()
    generator = ChangelogGenerator(project_root)

    if preview:
        result = generator.preview(project_path=project_path)
        if not result.success:
            _fail(result.message)
        if not result.has_new_commits:
            console.print(f"[green]✅ {escape(result.message)}[/green]")
            return
        console.print(Panel(Text(result.preview_content), title="Preview"))
        console.print(
            f"Version: {escape(result.version or '')} | {result.commits_count} new commits",
            highlight=False,
        )
        return

    result = generator.generate(force=force, project_path=project_path)
    if not result.success:
        _fail(result.message)

    if result.updated:
        console.print(
            f"[green]✅ Changelog updated: {escape(str(result.changelog_path))}[/green]",
            highlight=False,
        )
        console.print(
            f"Version: {escape(result.version or '')} | {result.commits_count} new commits",
            highlight=False,
        )
    else:
        console.print(f"[green]✅ {escape(result.message)}[/green]")


@main.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file")
def init(force: bool):
    """Create a default changelog-config.json in the current directory."""
    try:
        created = init_config(Path.cwd(), force=force)
    except OSError as e:
        _fail(f"Could not create config file: {e}")
        return

    if created:
        console.print(f"[green]✅ Created {escape(str(Path.cwd() / CONFIG_FILENAME))}[/green]")
    else:
        console.print(f"[yellow]Config file already exists: {CONFIG_FILENAME}[/yellow]")
        console.print("💡 Use --force to overwrite it")


@main.command()
@click.option("--check", "-c", is_flag=True, help="Check the config file is valid")
@click.option("--show", "-s", is_flag=True, help="Show the effective configuration")
def config(check: bool, show: bool):
    """Inspect the changelog-config.json in the current directory."""
    validation = validate_existing_config(Path.cwd())

    if show:
        if not validation.valid:
            _fail(f"Cannot show config: {validation.message}")
        console.print_json(json.dumps(validation.config, ensure_ascii=False))
        return

    if check:
        if validation.valid:
            console.print("[green]✅ Config file is valid[/green]")
            console.print(f"📁 {escape(str(validation.path))}", highlight=False)
            return
        console.print(f"📁 {escape(str(validation.path))}", highlight=False)
        if not validation.path.exists():
            console.print("💡 Run 'changelog-gen init' to create one")
        _fail(validation.message)

    if validation.path.exists():
        status = "valid" if validation.valid else "invalid"
        console.print(f"Config file: {escape(str(validation.path))} ({status})", highlight=False)
        if not validation.valid:
            console.print(f"[red]{escape(validation.message)}[/red]", highlight=False)
    else:
        console.print("[yellow]No config file found[/yellow]")
        console.print("💡 Run 'changelog-gen init' to create one")


def _render_latest(entry: LatestEntry, output_format: str) -> str:
    """Format the newest changelog section for output."""
    if output_format == "json":
        return json.dumps(
            {
                "version": entry.version,
                "date": entry.date,
                "lastRecordedId": entry.last_recorded_id,
                "content": entry.content,
            },
            indent=2,
            ensure_ascii=False,
        )
    if output_format == "text":
        lines = [entry.header.lstrip("#").strip(), ""]
        for line in entry.content.splitlines():
            lines.append(line.lstrip("#").strip() if line.startswith("#") else line)
        return "\n".join(lines)
    return f"{entry.header}\n\n{entry.content}"


@main.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text", "markdown"]),
    default="markdown",
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to a file")
@click.option("--version-only", is_flag=True, help="Print only the version")
@click.option("--content-only", is_flag=True, help="Print only the entry content")
@click.option("--changelog-path", type=click.Path(dir_okay=False), help="Changelog to read")
@click.option("--quiet", "-q", is_flag=True, help="Suppress status messages")
@click.option("--raw", is_flag=True, help="Print plain output without decoration")
def latest(
    output_format: str,
    output: Optional[str],
    version_only: bool,
    content_only: bool,
    changelog_path: Optional[str],
    quiet: bool,
    raw: bool,
):
    """Show the newest entry of the changelog."""
    if quiet:
        configure_logging(quiet=True)

    project_root = Path.cwd()
    generator = ChangelogGenerator(project_root, config=load_config(project_root))
    try:
        entry = generator.latest(Path(changelog_path) if changelog_path else None)
    except ChangelogError as e:
        _fail(str(e))
        return

    if version_only:
        text = entry.version
    elif content_only:
        text = entry.content
    else:
        text = _render_latest(entry, output_format)

    if output:
        try:
            Path(output).write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            _fail(f"Could not write {output}: {e}")
            return
        if not quiet:
            console.print(f"[green]✅ Written to {escape(output)}[/green]", highlight=False)
        return

    if raw or quiet or version_only or content_only:
        click.echo(text)
    elif output_format == "json":
        console.print_json(text)
    else:
        console.print(Panel(Text(text), title=f"Latest: {entry.version}"))


if __name__ == "__main__":
    main()

"""CLI entry point for plugin-registry.

Invoked as::

    plugin-registry [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m pluginreg.cli.main

Commands
--------
resolve     Resolve plugin configurations and print them
list        List the plugins found in a registry checkout
check       Resolve everything and report only success or the first error
version     Show version information
"""
from __future__ import annotations

import fnmatch
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from pluginreg.core.settings import RegistrySettings
    from pluginreg.resolver.models import PluginConfiguration

console = Console()
err_console = Console(stderr=True)

RELEASES_ENVVAR = "PLUGIN_REGISTRY_RELEASES"


def _split_releases(releases: tuple[str, ...]) -> list[str]:
    """Flatten ``--release`` values, each of which may be comma-separated."""
    result: list[str] = []
    for value in releases:
        result.extend(part.strip() for part in value.split(",") if part.strip())
    return result


def _name_filter(patterns: tuple[str, ...]):
    if not patterns:
        return None
    return lambda name: any(fnmatch.fnmatchcase(name, pattern) for pattern in patterns)


def _settings(plugins_dir: str) -> "RegistrySettings":
    from pluginreg.core.settings import RegistrySettings

    return RegistrySettings(plugins_dir=plugins_dir)


def _collect_or_exit(
    releases: tuple[str, ...],
    root: str,
    patterns: tuple[str, ...],
    plugins_dir: str,
) -> list["PluginConfiguration"]:
    """Resolve configurations, printing the error and exiting on failure."""
    from pluginreg.core.errors import RegistryError
    from pluginreg.resolver.collector import collect_plugin_configs

    release_list = _split_releases(releases)
    if not release_list:
        err_console.print(
            f"[red]Error:[/red] No releases given. Use --release or set {RELEASES_ENVVAR}."
        )
        sys.exit(2)
    try:
        return collect_plugin_configs(
            release_list, root, _name_filter(patterns), _settings(plugins_dir)
        )
    except RegistryError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)


def _release_option(func):
    return click.option(
        "--release",
        "-r",
        "releases",
        multiple=True,
        envvar=RELEASES_ENVVAR,
        help=f"Target release; repeat or comma-separate. Defaults to ${RELEASES_ENVVAR}.",
    )(func)


def _plugins_dir_option(func):
    return click.option(
        "--plugins-dir",
        default="plugins",
        show_default=True,
        help="Directory below ROOT that holds the plugins.",
    )(func)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="plugin-registry")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show informational log messages")
@click.option("--debug", is_flag=True, default=False, help="Show debug log messages")
@click.option("--quiet", "-q", is_flag=True, default=False, help="Only log errors")
def cli(verbose: bool, debug: bool, quiet: bool) -> None:
    """Resolve plugin build configurations across host framework releases."""
    from pluginreg.core.logging import setup_logging

    setup_logging(quiet=quiet, verbose=verbose, debug=debug)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from pluginreg import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]plugin-registry[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# list command
# ---------------------------------------------------------------------------


@cli.command(name="list")
@click.argument("root", type=click.Path(exists=True, file_okay=False), default=".")
@_plugins_dir_option
def list_command(root: str, plugins_dir: str) -> None:
    """List the plugins of the registry at ROOT without resolving them."""
    from pluginreg.core.errors import RegistryError
    from pluginreg.resolver.enumerator import applicable_modules, plugin_directories

    settings = _settings(plugins_dir)
    plugins_root = Path(root) / settings.plugins_dir

    table = Table(title=f"Plugins: {plugins_root}")
    table.add_column("Type", style="bold")
    table.add_column("Group")
    table.add_column("Plugin")
    table.add_column("Modules")

    count = 0
    try:
        for plugin_type, plugin_dir in plugin_directories(plugins_root, settings):
            modules = applicable_modules(plugin_dir, plugin_type)
            table.add_row(
                plugin_type,
                plugin_dir.parent.name,
                plugin_dir.name,
                ", ".join(m.value for m in modules),
            )
            count += 1
    except (RegistryError, ValueError) as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    console.print(table)
    console.print(f"\n[bold]{count}[/bold] plugin(s)")


# ---------------------------------------------------------------------------
# resolve command
# ---------------------------------------------------------------------------


@cli.command(name="resolve")
@click.argument("root", type=click.Path(exists=True, file_okay=False), default=".")
@_release_option
@click.option("--plugin", "-p", "patterns", multiple=True, help="Only plugins matching this glob")
@click.option("--latest", is_flag=True, default=False, help="Keep only the latest release per path")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "yaml"], case_sensitive=False),
    default="table",
    help="Output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
@_plugins_dir_option
def resolve_command(
    root: str,
    releases: tuple[str, ...],
    patterns: tuple[str, ...],
    latest: bool,
    output_format: str,
    output: str | None,
    plugins_dir: str,
) -> None:
    """Resolve the plugin configurations of the registry at ROOT.

    Examples:

    \b
        plugin-registry resolve . --release 2.3.12 --release 3.0.0
        plugin-registry resolve . -r 3.0.0 --plugin 'auth*' --format json
    """
    from pluginreg.export import ConfigurationSerializer
    from pluginreg.resolver.ordering import latest_by_path

    configs = _collect_or_exit(releases, root, patterns, plugins_dir)
    if latest:
        configs = latest_by_path(configs)

    if output_format == "table":
        if output:
            err_console.print("[red]Error:[/red] --output requires --format json or yaml")
            sys.exit(2)
        _print_table(configs)
        return

    serializer = ConfigurationSerializer()
    text = serializer.to_json(configs) if output_format == "json" else serializer.to_yaml(configs)
    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]{len(configs)} configuration(s) written to[/green] {output}")
    else:
        # plain output so it can be piped into other tools
        click.echo(text)


def _print_table(configs: list["PluginConfiguration"]) -> None:
    table = Table(title="Plugin configurations", show_lines=True)
    table.add_column("Path", style="bold")
    table.add_column("Release")
    table.add_column("Module")
    table.add_column("Artifacts")
    table.add_column("Parent", style="dim")

    for config in configs:
        artifacts = "\n".join(
            escape(a.coordinate) + (f" [dim]({a.alias})[/dim]" if a.alias else "")
            for a in config.artifacts
        )
        table.add_row(
            escape(config.path), config.release, config.module.value, artifacts, config.parent or ""
        )

    console.print(table)
    console.print(f"\n[bold]{len(configs)}[/bold] configuration(s)")


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("root", type=click.Path(exists=True, file_okay=False), default=".")
@_release_option
@_plugins_dir_option
def check_command(root: str, releases: tuple[str, ...], plugins_dir: str) -> None:
    """Resolve every plugin at ROOT and report whether the registry is consistent.

    Exits with status 1 on the first malformed plugin.
    """
    configs = _collect_or_exit(releases, root, (), plugins_dir)
    console.print(f"[green]OK[/green] {len(configs)} configuration(s) resolved")


if __name__ == "__main__":
    cli()

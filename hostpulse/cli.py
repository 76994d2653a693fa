#!/usr/bin/env python3
"""
HostPulse CLI - operator entry point.

Commands:
- status: bootstrap the provider once and print every node
- nodes: list the configured hosts that survive the exclusion pattern
"""
import asyncio
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hostpulse import __version__
from hostpulse.config import load_config
from hostpulse.core.exceptions import ConfigError, ProviderNotReadyError
from hostpulse.core.types import NodeStatus
from hostpulse.provider import HostDataProvider
from hostpulse.provider.registry import filter_host_names
from hostpulse.utils.logger import setup_logger

console = Console()


def _mark(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "[red]no[/red]"


def _percent(value) -> str:
    return f"{value:.1f}%" if value is not None else "-"


def render_nodes(provider: HostDataProvider) -> Table:
    """Build a table with one row per node."""
    table = Table(title=f"{provider.name} ({provider.node_type})")
    table.add_column("Host", style="cyan", no_wrap=True)
    table.add_column("Address")
    table.add_column("Status", no_wrap=True)
    table.add_column("Static")
    table.add_column("Dynamic")
    table.add_column("CPU", justify="right")
    table.add_column("Memory", justify="right")

    for node in provider.all_nodes:
        status_style = "green" if node.status == NodeStatus.ACTIVE else "red"
        static, dynamic = node.static_cache, node.dynamic_cache
        table.add_row(
            node.name,
            node.ip or "-",
            f"[{status_style}]{node.status}[/{status_style}]",
            _mark(bool(static and static.has_data)),
            _mark(bool(dynamic and dynamic.has_data)),
            _percent(node.stats.cpu_percent if node.stats else None),
            _percent(node.stats.memory_percent if node.stats else None),
        )
    return table


async def _bootstrap(provider: HostDataProvider, timeout: float | None) -> None:
    provider.start()
    await provider.wait_ready(timeout)


@click.group()
@click.version_option(version=__version__, prog_name="hostpulse")
@click.option('--config', '-c', 'config_path', default=None, help='Path to config.yaml')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug output')
@click.pass_context
def cli(ctx, config_path, verbose):
    """
    HostPulse - host monitoring data provider.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(2)

    setup_logger(verbose=verbose, config=config.logging)
    ctx.ensure_object(dict)
    ctx.obj['config'] = config


@cli.command()
@click.option('--timeout', '-t', type=float, default=None, help='Seconds to wait for readiness')
@click.option('--json', 'as_json', is_flag=True, help='Print nodes as JSON')
@click.pass_context
def status(ctx, timeout, as_json):
    """Poll every configured host once and show the result."""
    config = ctx.obj['config']
    provider = HostDataProvider(config.provider, config.dashboard.exclude_pattern_regex)

    try:
        asyncio.run(_bootstrap(provider, timeout))
    except ProviderNotReadyError as e:
        console.print(f"[yellow]⚠️  {escape(str(e))}[/yellow]")
        sys.exit(1)

    if as_json:
        console.print_json(data=[node.to_dict() for node in provider.all_nodes])
    elif provider.all_nodes:
        console.print(render_nodes(provider))
    else:
        console.print("[yellow]No nodes configured.[/yellow]")

    sys.exit(0 if provider.has_data else 1)


@cli.command()
@click.pass_context
def nodes(ctx):
    """List configured hosts after applying the exclusion pattern."""
    config = ctx.obj['config']
    names = filter_host_names(config.provider.nodes, config.dashboard.exclude_pattern_regex)
    for name in names:
        console.print(name)
    excluded = len(config.provider.nodes) - len(names)
    if excluded:
        console.print(f"[dim]{excluded} excluded[/dim]")


def main():
    """Entry point for the hostpulse console script."""
    cli(obj={})


if __name__ == '__main__':
    main()

"""CLI entry point for capmesh."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.table import Table

from capmesh import __version__

if TYPE_CHECKING:
    from capmesh.core.types import Result
    from capmesh.mesh.mesh import Mesh

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="capmesh")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: $CAPMESH_CONFIG or ~/.capmesh/config.toml)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log every agent run")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """capmesh: capability-based delegation between agents."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


def _get_mesh(ctx: click.Context) -> Mesh:
    from capmesh.config import build_mesh, load_config
    from capmesh.observability import setup_logging

    config = load_config(ctx.obj["config_path"])
    if ctx.obj["verbose"]:
        config.logging.level = "DEBUG"
        config.logging.log_runs = True
    setup_logging(config.logging.level, config.logging.format)
    return build_mesh(config)


@main.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Write the default config file if it does not exist."""
    from capmesh.config import write_default_config

    path, created = write_default_config(ctx.obj["config_path"])
    if created:
        console.print(f"[green]Config initialized at {path}[/green]")
    else:
        console.print(f"[dim]Config already exists at {path}[/dim]")


@main.command()
@click.pass_context
def agents(ctx: click.Context) -> None:
    """List registered agents and their capabilities."""
    mesh = _get_mesh(ctx)
    registered = mesh.list_agents()

    if not registered:
        console.print("[dim]No agents registered.[/dim]")
        return

    table = Table(title="Agents")
    table.add_column("Agent ID", style="cyan")
    table.add_column("Provides", style="green")
    table.add_column("Needs", style="yellow")
    table.add_column("Description", max_width=40)

    for agent in registered:
        table.add_row(
            agent.id,
            ", ".join(agent.provides) or "-",
            ", ".join(agent.needs) or "-",
            agent.description,
        )

    console.print(table)

    unmet = mesh.stats()["unmet_needs"]
    if unmet:
        console.print(f"[yellow]Unmet needs: {', '.join(unmet)}[/yellow]")


@main.command()
@click.argument("capability")
@click.pass_context
def providers(ctx: click.Context, capability: str) -> None:
    """Show agents that provide CAPABILITY."""
    from capmesh.core.capability import cap

    mesh = _get_mesh(ctx)
    found = mesh.find_providers(cap(capability))

    if not found:
        console.print(f"[dim]No agent provides '{capability}'.[/dim]")
        return

    for agent in found:
        console.print(f"[cyan]{agent.id}[/cyan]  {agent.description}")


@main.command()
@click.argument("agent_id")
@click.pass_context
def tools(ctx: click.Context, agent_id: str) -> None:
    """Show the delegation tools AGENT_ID would receive right now."""
    from capmesh.core.errors import MeshError

    mesh = _get_mesh(ctx)
    try:
        agent = mesh.get_agent(agent_id)
    except MeshError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    resolved = mesh.resolve_tools(agent)
    if not resolved:
        console.print(f"[dim]No delegation tools for {agent_id}.[/dim]")
        return

    table = Table(title=f"Delegation tools for {agent_id}")
    table.add_column("Tool", style="cyan")
    table.add_column("Capability", style="green")
    table.add_column("Providers")

    for tool in resolved:
        table.add_row(tool.name, tool.capability, ", ".join(p.id for p in tool.providers))

    console.print(table)


@main.command()
@click.argument("task")
@click.option("--agent", "agent_id", default=None, help="Run this agent instead of the first one")
@click.pass_context
def run(ctx: click.Context, task: str, agent_id: str | None) -> None:
    """Run TASK on the mesh."""
    from capmesh.core.errors import MeshError

    mesh = _get_mesh(ctx)
    try:
        if agent_id:
            result = asyncio.run(mesh.run_agent(None, agent_id, task))
        else:
            result = asyncio.run(mesh.run(None, task))
    except MeshError as exc:
        console.print(f"[red]{type(exc).__name__}: {exc}[/red]")
        raise SystemExit(1) from exc

    _print_result(result)


def _print_result(result: Result) -> None:
    """Print run result summary."""
    console.print(result.output)
    console.print(
        f"\n[dim]Chain: {' -> '.join(result.call_chain) or '-'} | "
        f"Tokens: {result.tokens_in} in / {result.tokens_out} out | "
        f"Duration: {result.duration:.3f}s | "
        f"Trace: {result.trace_id}[/dim]"
    )

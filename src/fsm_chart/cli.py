"""Click CLI entry point for fsm-chart."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import click

from fsm_chart import __version__
from fsm_chart.config import ChartStyle, dump_style, load_style
from fsm_chart.definitions import load_definition
from fsm_chart.errors import ChartError
from fsm_chart.models import RenderOptions
from fsm_chart.renderer import OUTPUT_FORMATS, ChartRenderer


@click.group()
@click.version_option(version=__version__, prog_name="fsm-chart")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Verbose logging")
def cli(verbose: bool) -> None:
    """Render state machine definitions as Graphviz charts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("definitions", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--directory", "-d",
    type=click.Path(file_okay=False),
    default=".",
    help="Directory to write charts into",
)
@click.option(
    "--format", "-t", "fmt",
    type=click.Choice(sorted(OUTPUT_FORMATS)),
    default="png",
    help="Output format",
)
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), default=None)
@click.option("--hide-enter-exit", is_flag=True, default=False, help="Hide entry/exit actions")
@click.option("--undirected", is_flag=True, default=False, help="Draw edges without arrows")
@click.pass_context
def render(
    ctx: click.Context,
    definitions: tuple[str, ...],
    directory: str,
    fmt: str,
    config_path: str | None,
    hide_enter_exit: bool,
    undirected: bool,
) -> None:
    """Render one chart per DEFINITION file."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    options = RenderOptions(hide_enter_exit=hide_enter_exit, directed=not undirected)

    try:
        style = load_style(Path(config_path)) if config_path else ChartStyle()
        for definition_path in definitions:
            definition = load_definition(Path(definition_path))
            renderer = ChartRenderer(
                definition, directed=options.directed, options=options, style=style
            )
            target = renderer.save(out_dir / f"{_slugify(definition.name)}.{fmt}", format=fmt)
            click.echo(f"Wrote: {target}")
    except ChartError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return


@cli.command()
@click.argument("definition", type=click.Path(exists=True))
@click.option(
    "--format", "fmt",
    type=click.Choice(["summary", "dot", "json"]),
    default="summary",
)
@click.option("--hide-enter-exit", is_flag=True, default=False, help="Hide entry/exit actions")
@click.pass_context
def show(ctx: click.Context, definition: str, fmt: str, hide_enter_exit: bool) -> None:
    """Build the chart graph for DEFINITION and print it."""
    from fsm_chart.exporters.json_export import export_json
    from fsm_chart.exporters.networkx_export import find_cycles, unreachable_states

    try:
        machine = load_definition(Path(definition))
        renderer = ChartRenderer(machine, options={"hide_enter_exit": hide_enter_exit})
    except ChartError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return

    gm = renderer.graph
    if fmt == "dot":
        click.echo(renderer.to_digraph().source)
        return
    if fmt == "json":
        click.echo(export_json(gm))
        return

    click.echo(
        f"Chart {renderer.name}: {len(gm.nodes)} nodes, {len(gm.edges)} edges"
    )
    initial = [e.target for e in gm.edges if e.source == gm.start_node]
    if initial:
        click.echo(f"Initial states: {', '.join(initial)}")
    terminal = [e.source for e in gm.edges if e.target == gm.end_node]
    if terminal:
        click.echo(f"Terminal states: {', '.join(terminal)}")
    unreachable = unreachable_states(gm)
    if unreachable:
        click.echo(f"Unreachable states: {', '.join(unreachable)}")
    cycles = find_cycles(gm)
    if cycles:
        click.echo(f"Cycles detected: {len(cycles)}")


@cli.command("dump-config")
def dump_config() -> None:
    """Print the default chart style as YAML."""
    click.echo(dump_style(), nl=False)


def _slugify(text: str) -> str:
    """Convert a machine name to a filename slug."""
    slug = text.lower().strip()
    slug = re.sub(r"[^a-z0-9_\s-]", "", slug)
    slug = re.sub(r"[\s]+", "_", slug)
    return slug.strip("_-") or "state_machine"

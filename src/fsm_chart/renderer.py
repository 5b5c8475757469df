"""Chart renderer: definition in, Graphviz output out."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import graphviz

from fsm_chart.aggregate import aggregate_transitions
from fsm_chart.builder import build_chart_graph
from fsm_chart.config import ChartStyle
from fsm_chart.definitions import MachineDefinition
from fsm_chart.errors import RenderBackendError
from fsm_chart.exporters.dot import to_digraph
from fsm_chart.exporters.networkx_export import unreachable_states
from fsm_chart.models import ChartGraph, RenderOptions

logger = logging.getLogger(__name__)

# Formats written from the DOT source without running Graphviz.
SOURCE_FORMATS = frozenset({"dot", "gv"})
OUTPUT_FORMATS = frozenset(graphviz.FORMATS) | SOURCE_FORMATS


class ChartRenderer:
    """Builds the chart graph for a machine and saves it through Graphviz.

    The graph is built once, at construction, and is read-only afterwards.
    """

    def __init__(
        self,
        definition: MachineDefinition,
        directed: bool | None = None,
        options: RenderOptions | Mapping[str, Any] | None = None,
        style: ChartStyle | None = None,
    ) -> None:
        if not isinstance(options, RenderOptions):
            options = RenderOptions.from_mapping(options)
        self.options = RenderOptions(
            hide_enter_exit=options.hide_enter_exit,
            directed=options.directed if directed is None else directed,
        )
        self.style = style or ChartStyle()
        self.name = definition.name

        edges = aggregate_transitions(definition.transitions())
        self._graph = build_chart_graph(
            definition.states(),
            edges,
            initial_states=definition.initial_states(),
            terminal_states=definition.terminal_states(),
            options=self.options,
        )
        logger.debug(
            "Chart for %s: %d states, %d transitions",
            self.name,
            len(self._graph.state_nodes),
            len(edges),
        )
        unreachable = unreachable_states(self._graph)
        if unreachable:
            logger.warning(
                "Unreachable states in %s: %s", self.name, ", ".join(unreachable)
            )

    @property
    def graph(self) -> ChartGraph:
        return self._graph

    @property
    def start_node(self) -> str:
        return self._graph.start_node

    @property
    def end_node(self) -> str | None:
        return self._graph.end_node

    def to_digraph(self) -> graphviz.Digraph | graphviz.Graph:
        return to_digraph(self._graph, self.style, name=self.name)

    def save(self, path: str | Path, format: str = "png") -> Path:
        """Write the chart to ``path`` in the given Graphviz output format.

        The file is written to a temporary sibling first and moved into
        place, so a failed save leaves any existing file untouched.
        Raises RenderBackendError on an unknown format, a Graphviz
        failure, or an unwritable path.
        """
        fmt = format.lower()
        if fmt not in OUTPUT_FORMATS:
            raise RenderBackendError(f"Unsupported output format: {format}")

        target = Path(path)
        data = self._render(fmt)
        try:
            _atomic_write(target, data)
        except OSError as exc:
            raise RenderBackendError(f"Cannot write {target}: {exc}") from exc
        logger.info("Saved %s chart to %s", fmt, target)
        return target

    def _render(self, fmt: str) -> bytes:
        dot = self.to_digraph()
        if fmt in SOURCE_FORMATS:
            return dot.source.encode("utf-8")
        try:
            return dot.pipe(format=fmt)
        except graphviz.ExecutableNotFound as exc:
            raise RenderBackendError(
                "Graphviz executables not found; install Graphviz to render images"
            ) from exc
        except graphviz.CalledProcessError as exc:
            raise RenderBackendError(f"Graphviz failed to render {fmt}: {exc}") from exc
        except ValueError as exc:
            raise RenderBackendError(str(exc)) from exc


def _atomic_write(target: Path, data: bytes) -> None:
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

"""Build the chart graph from states and aggregated edges."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fsm_chart.errors import UnknownStateReference
from fsm_chart.labels import format_node_label, format_transition_label
from fsm_chart.models import (
    END_NODE_ID,
    START_NODE_ID,
    ChartEdge,
    ChartGraph,
    Edge,
    Node,
    NodeKind,
    RenderOptions,
    StateSpec,
)

logger = logging.getLogger(__name__)

EDGE_ROW_SEPARATOR = "\n"


def state_node(state: StateSpec, hide_enter_exit: bool = False) -> Node:
    """Create the node for a single state."""
    label = format_node_label(
        state.name, state.enter, state.exit, hide_enter_exit=hide_enter_exit
    )
    return Node(id=state.name, kind=NodeKind.STATE, label=label, state=state)


def edge_label(edge: Edge) -> str:
    """One label row per contributing transition, in declaration order."""
    return EDGE_ROW_SEPARATOR.join(format_transition_label(t) for t in edge.transitions)


def build_chart_graph(
    states: Iterable[StateSpec],
    edges: Iterable[Edge],
    initial_states: Iterable[str] = (),
    terminal_states: Iterable[str] = (),
    options: RenderOptions | None = None,
) -> ChartGraph:
    """Build a ChartGraph with start and end sentinels around the states.

    Edges are ordered: start edges, transition edges, end edges.
    Raises UnknownStateReference when an edge or an initial/terminal
    entry names a state that is not in ``states``.
    """
    options = options or RenderOptions()
    graph = ChartGraph(directed=options.directed)

    graph.add_node(Node(id=START_NODE_ID, kind=NodeKind.START))
    for state in states:
        graph.add_node(state_node(state, options.hide_enter_exit))

    initial = list(dict.fromkeys(initial_states))
    terminal = list(dict.fromkeys(terminal_states))
    _require_states(graph, initial, "initial state")
    _require_states(graph, terminal, "terminal state")

    if terminal:
        graph.end_node = END_NODE_ID
        graph.add_node(Node(id=END_NODE_ID, kind=NodeKind.END))

    for name in initial:
        graph.add_edge(ChartEdge(source=START_NODE_ID, target=name))

    for edge in edges:
        for endpoint in (edge.source, edge.target):
            if endpoint not in graph.nodes or graph.nodes[endpoint].is_sentinel:
                raise UnknownStateReference(
                    endpoint, f"transition {edge.source} -> {edge.target}"
                )
        graph.add_edge(ChartEdge(
            source=edge.source,
            target=edge.target,
            label=edge_label(edge),
            transitions=tuple(edge.transitions),
        ))

    for name in terminal:
        graph.add_edge(ChartEdge(source=name, target=END_NODE_ID))

    logger.debug(
        "Built chart graph: %d nodes, %d edges", len(graph.nodes), len(graph.edges)
    )
    return graph


def _require_states(graph: ChartGraph, names: list[str], context: str) -> None:
    for name in names:
        node = graph.nodes.get(name)
        if node is None or node.is_sentinel:
            raise UnknownStateReference(name, context)

"""Graphviz export for chart graphs."""

from __future__ import annotations

import graphviz

from fsm_chart.config import ChartStyle
from fsm_chart.models import ChartGraph, NodeKind


def to_digraph(
    graph: ChartGraph, style: ChartStyle | None = None, name: str = "state_machine"
) -> graphviz.Digraph | graphviz.Graph:
    """Convert a ChartGraph into a graphviz graph object."""
    style = style or ChartStyle()
    factory = graphviz.Digraph if graph.directed else graphviz.Graph
    dot = factory(
        name=name,
        graph_attr=style.graph,
        node_attr=style.node,
        edge_attr=style.edge,
    )

    for node in graph.nodes.values():
        if node.kind is NodeKind.START:
            dot.node(node.id, **style.start_node)
        elif node.kind is NodeKind.END:
            dot.node(node.id, **style.end_node)
        else:
            dot.node(node.id, label=node.label)

    for edge in graph.edges:
        dot.edge(edge.source, edge.target, label=graphviz.nohtml(_escape(edge.label)))

    return dot


def export_dot(graph: ChartGraph, style: ChartStyle | None = None) -> str:
    """Export a ChartGraph as a Graphviz DOT string."""
    return to_digraph(graph, style).source


def _escape(text: str) -> str:
    """Turn label line breaks into DOT centered-line escapes."""
    return text.replace("\n", "\\n")

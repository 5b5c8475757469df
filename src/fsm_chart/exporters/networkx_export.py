"""NetworkX conversion and reachability checks for chart graphs."""

from __future__ import annotations

import networkx as nx

from fsm_chart.models import ChartGraph


def to_networkx(graph: ChartGraph) -> nx.DiGraph:
    """Convert a ChartGraph to a NetworkX DiGraph."""
    g: nx.DiGraph[str] = nx.DiGraph()
    for node_id, node in graph.nodes.items():
        g.add_node(node_id, kind=node.kind.value)
    for e in graph.edges:
        g.add_edge(e.source, e.target, label=e.label)
    return g


def unreachable_states(graph: ChartGraph) -> list[str]:
    """Return states that cannot be reached from the start node."""
    g = to_networkx(graph)
    reachable = nx.descendants(g, graph.start_node)
    return [n.id for n in graph.state_nodes if n.id not in reachable]


def find_cycles(graph: ChartGraph) -> list[list[str]]:
    """Return the simple cycles between states, each sorted."""
    return [sorted(c) for c in nx.simple_cycles(to_networkx(graph))]

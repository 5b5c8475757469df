"""JSON export for chart graphs."""

from __future__ import annotations

import json
from typing import Any

from fsm_chart.labels import flatten_guards
from fsm_chart.models import ChartGraph


def graph_to_json(graph: ChartGraph) -> dict[str, Any]:
    """Export a ChartGraph as a JSON-serializable dictionary."""
    return {
        "directed": graph.directed,
        "start_node": graph.start_node,
        "end_node": graph.end_node,
        "nodes": {
            node_id: {
                "kind": node.kind.value,
                "label": node.label,
                "enter": list(node.state.enter) if node.state else [],
                "exit": list(node.state.exit) if node.state else [],
            }
            for node_id, node in graph.nodes.items()
        },
        "edges": [
            {
                "source": e.source,
                "target": e.target,
                "label": e.label,
                "transitions": [
                    {
                        "event": t.event,
                        "guards": list(flatten_guards(t.guards)),
                        "before": list(t.before),
                        "after": list(t.after),
                    }
                    for t in e.transitions
                ],
            }
            for e in graph.edges
        ],
    }


def export_json(graph: ChartGraph, indent: int = 2) -> str:
    """Export a ChartGraph as a JSON string."""
    return json.dumps(graph_to_json(graph), indent=indent)

"""fsm-chart: render finite state machine definitions as Graphviz charts."""

from fsm_chart.errors import (
    ChartError,
    DefinitionError,
    InvalidTransition,
    RenderBackendError,
    UnknownStateReference,
)
from fsm_chart.models import (
    END_NODE_ID,
    START_NODE_ID,
    ChartEdge,
    ChartGraph,
    Edge,
    GuardGroup,
    GuardName,
    Node,
    NodeKind,
    RenderOptions,
    StateSpec,
    TransitionSpec,
)
from fsm_chart.renderer import ChartRenderer

__version__ = "0.1.0"

__all__ = [
    "END_NODE_ID",
    "START_NODE_ID",
    "ChartEdge",
    "ChartError",
    "ChartGraph",
    "ChartRenderer",
    "DefinitionError",
    "Edge",
    "GuardGroup",
    "GuardName",
    "InvalidTransition",
    "Node",
    "NodeKind",
    "RenderBackendError",
    "RenderOptions",
    "StateSpec",
    "TransitionSpec",
    "UnknownStateReference",
    "__version__",
]

"""Core data models for fsm-chart."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from fsm_chart.errors import UnknownStateReference

START_NODE_ID = "__start__"
END_NODE_ID = "__end__"
RESERVED_NODE_IDS = frozenset({START_NODE_ID, END_NODE_ID})


@dataclass(frozen=True)
class StateSpec:
    """A state with its entry and exit action names."""

    name: str
    enter: tuple[str, ...] = ()
    exit: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("State name must not be empty")
        if self.name in RESERVED_NODE_IDS:
            raise ValueError(f"State name is reserved: {self.name}")
        if ":" in self.name:
            raise ValueError(f"State name must not contain ':': {self.name}")


@dataclass(frozen=True)
class GuardName:
    """A single named guard condition."""

    name: str


@dataclass(frozen=True)
class GuardGroup:
    """Guards that must all hold together."""

    members: tuple[Guard, ...] = ()


Guard = Union[GuardName, GuardGroup]


@dataclass(frozen=True)
class TransitionSpec:
    """A transition as declared in the machine definition.

    A single spec may name several sources and targets; every
    source/target combination is one edge of the chart.
    """

    sources: tuple[str, ...]
    targets: tuple[str, ...]
    event: str
    guards: tuple[Guard, ...] = ()
    before: tuple[str, ...] = ()
    after: tuple[str, ...] = ()


@dataclass
class Edge:
    """All transition specs that connect one source to one target."""

    source: str
    target: str
    transitions: list[TransitionSpec] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.target)


class NodeKind(Enum):
    """Kinds of chart nodes."""

    STATE = "state"
    START = "start"
    END = "end"


@dataclass(frozen=True)
class Node:
    """A chart node: a machine state or one of the sentinel markers."""

    id: str
    kind: NodeKind = NodeKind.STATE
    label: str = ""
    state: StateSpec | None = None

    @property
    def is_sentinel(self) -> bool:
        return self.kind is not NodeKind.STATE


@dataclass(frozen=True)
class ChartEdge:
    """A drawn edge with its formatted label."""

    source: str
    target: str
    label: str = ""
    transitions: tuple[TransitionSpec, ...] = ()

    def as_triple(self) -> tuple[str, str, str]:
        return (self.source, self.target, self.label)


@dataclass
class ChartGraph:
    """The complete chart: nodes keyed by identifier plus ordered edges."""

    nodes: dict[str, Node] = field(default_factory=dict)
    edges: list[ChartEdge] = field(default_factory=list)
    start_node: str = START_NODE_ID
    end_node: str | None = None
    directed: bool = True

    def add_node(self, node: Node) -> Node:
        """Add a node unless one with the same identifier already exists."""
        return self.nodes.setdefault(node.id, node)

    def add_edge(self, edge: ChartEdge) -> ChartEdge:
        for endpoint in (edge.source, edge.target):
            if endpoint not in self.nodes:
                raise UnknownStateReference(
                    endpoint, f"edge {edge.source} -> {edge.target}"
                )
        self.edges.append(edge)
        return edge

    def each_node(self) -> dict[str, Node]:
        return dict(self.nodes)

    def each_edge(self) -> list[ChartEdge]:
        return list(self.edges)

    def edge_triples(self) -> list[tuple[str, str, str]]:
        return [e.as_triple() for e in self.edges]

    def find_edge(self, source: str, target: str) -> ChartEdge | None:
        for edge in self.edges:
            if edge.source == source and edge.target == target:
                return edge
        return None

    @property
    def state_nodes(self) -> list[Node]:
        return [n for n in self.nodes.values() if not n.is_sentinel]


@dataclass(frozen=True)
class RenderOptions:
    """Options that change how the chart is built and drawn."""

    hide_enter_exit: bool = False
    directed: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> RenderOptions:
        data = data or {}
        hide = data.get("hide_enter_exit", data.get("hideEnterExit", False))
        return cls(
            hide_enter_exit=bool(hide),
            directed=bool(data.get("directed", True)),
        )

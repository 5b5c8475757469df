"""Collapse transition specs into one edge per (source, target) pair."""

from __future__ import annotations

from collections.abc import Iterable

from fsm_chart.errors import InvalidTransition
from fsm_chart.models import Edge, TransitionSpec


def expand_pairs(spec: TransitionSpec) -> list[tuple[str, str]]:
    """Return every (source, target) pair a spec denotes, sources first."""
    if not spec.sources:
        raise InvalidTransition(f"Transition {spec.event!r} has no source states")
    if not spec.targets:
        raise InvalidTransition(f"Transition {spec.event!r} has no target states")
    return [(source, target) for source in spec.sources for target in spec.targets]


def aggregate_transitions(specs: Iterable[TransitionSpec]) -> list[Edge]:
    """Merge specs sharing a (source, target) pair into a single Edge.

    Edges come out in first-seen order and each edge keeps its
    contributing specs in the order they were supplied, duplicates
    included.
    """
    edges: dict[tuple[str, str], Edge] = {}
    for spec in specs:
        for source, target in expand_pairs(spec):
            edge = edges.get((source, target))
            if edge is None:
                edge = edges[(source, target)] = Edge(source=source, target=target)
            edge.transitions.append(spec)
    return list(edges.values())

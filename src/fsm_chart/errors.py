"""Exception types raised while building and rendering charts."""

from __future__ import annotations


class ChartError(Exception):
    """Base class for all fsm-chart errors."""


class DefinitionError(ChartError):
    """Raised when a state machine definition is malformed."""


class InvalidTransition(ChartError):
    """Raised when a transition has no source or no target states."""


class UnknownStateReference(ChartError):
    """Raised when an edge, initial or terminal entry names an unknown state."""

    def __init__(self, state: str, context: str = "") -> None:
        self.state = state
        message = f"Unknown state: {state!r}"
        if context:
            message += f" ({context})"
        super().__init__(message)


class RenderBackendError(ChartError):
    """Raised when Graphviz cannot produce or write the requested output."""

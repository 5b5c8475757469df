"""Graphviz style configuration for charts."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from fsm_chart.errors import DefinitionError

STYLE_SECTIONS = ("graph", "node", "edge", "start_node", "end_node")


def _default_graph() -> dict[str, str]:
    return {"rankdir": "TB"}


def _default_node() -> dict[str, str]:
    return {"shape": "Mrecord", "fontname": "Arial", "fontsize": "10", "penwidth": "0.7"}


def _default_edge() -> dict[str, str]:
    return {"fontname": "Arial", "fontsize": "9", "penwidth": "0.7"}


def _default_start_node() -> dict[str, str]:
    return {
        "shape": "circle",
        "style": "filled",
        "fillcolor": "black",
        "label": "",
        "width": "0.25",
        "height": "0.25",
    }


def _default_end_node() -> dict[str, str]:
    return {
        "shape": "doublecircle",
        "style": "filled",
        "fillcolor": "black",
        "label": "",
        "width": "0.2",
        "height": "0.2",
    }


@dataclass
class ChartStyle:
    """Graphviz attributes for each kind of chart element."""

    graph: dict[str, str] = field(default_factory=_default_graph)
    node: dict[str, str] = field(default_factory=_default_node)
    edge: dict[str, str] = field(default_factory=_default_edge)
    start_node: dict[str, str] = field(default_factory=_default_start_node)
    end_node: dict[str, str] = field(default_factory=_default_end_node)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {f.name: dict(getattr(self, f.name)) for f in fields(self)}

    def merged(self, overrides: dict[str, Any]) -> ChartStyle:
        """Return a copy with ``overrides`` applied section by section."""
        data = self.to_dict()
        for section, attrs in overrides.items():
            if section not in STYLE_SECTIONS:
                raise DefinitionError(
                    f"Unknown style section '{section}'; expected one of "
                    f"{', '.join(STYLE_SECTIONS)}"
                )
            if attrs is None:
                continue
            if not isinstance(attrs, dict):
                raise DefinitionError(f"Style section '{section}' must be a mapping")
            data[section].update({str(k): _attr_value(v) for k, v in attrs.items()})
        return ChartStyle(**data)


DEFAULT_STYLE = ChartStyle()


def _attr_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def load_style(path: Path) -> ChartStyle:
    """Load a YAML style file and merge it over the default style."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise DefinitionError(f"Cannot read {path}: {exc}") from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DefinitionError(f"Invalid YAML in {path}: {exc}") from exc

    if raw is None:
        return ChartStyle()
    if not isinstance(raw, dict):
        raise DefinitionError(f"Invalid style format in {path}: expected mapping")
    return ChartStyle().merged(raw)


def dump_style(style: ChartStyle | None = None) -> str:
    """Return the style as YAML text."""
    style = style or DEFAULT_STYLE
    return yaml.safe_dump(style.to_dict(), default_flow_style=False, sort_keys=False)

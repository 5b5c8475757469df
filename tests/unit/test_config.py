"""Unit tests for fsm_chart.config."""

from pathlib import Path

import pytest
import yaml

from fsm_chart.config import DEFAULT_STYLE, ChartStyle, dump_style, load_style
from fsm_chart.errors import DefinitionError


class TestChartStyle:
    def test_defaults(self) -> None:
        style = ChartStyle()
        assert style.node["shape"] == "Mrecord"
        assert style.start_node["label"] == ""
        assert style.end_node["shape"] == "doublecircle"

    def test_instances_do_not_share_dicts(self) -> None:
        a = ChartStyle()
        a.graph["rankdir"] = "LR"
        assert ChartStyle().graph["rankdir"] == "TB"

    def test_merged(self) -> None:
        style = ChartStyle().merged({"graph": {"rankdir": "LR"}, "edge": {"fontsize": 12}})
        assert style.graph["rankdir"] == "LR"
        assert style.edge["fontsize"] == "12"
        assert style.edge["fontname"] == "Arial"

    def test_merged_coerces_values(self) -> None:
        style = ChartStyle().merged({"graph": {"compound": True, "label": None}})
        assert style.graph["compound"] == "true"
        assert style.graph["label"] == ""

    def test_unknown_section(self) -> None:
        with pytest.raises(DefinitionError, match="Unknown style section"):
            ChartStyle().merged({"cluster": {}})

    def test_section_must_be_mapping(self) -> None:
        with pytest.raises(DefinitionError, match="must be a mapping"):
            ChartStyle().merged({"node": "box"})


class TestLoadStyle:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "style.yml"
        path.write_text("graph:\n  rankdir: LR\nnode:\n  shape: box\n")
        style = load_style(path)
        assert style.graph["rankdir"] == "LR"
        assert style.node["shape"] == "box"
        assert style.node["fontname"] == "Arial"

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "style.yml"
        path.write_text("")
        assert load_style(path) == ChartStyle()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "style.yml"
        path.write_text("graph: [\n")
        with pytest.raises(DefinitionError, match="Invalid YAML"):
            load_style(path)

    def test_unreadable_path(self, tmp_path: Path) -> None:
        with pytest.raises(DefinitionError, match="Cannot read"):
            load_style(tmp_path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "style.yml"
        path.write_text("- a\n")
        with pytest.raises(DefinitionError, match="expected mapping"):
            load_style(path)


class TestDumpStyle:
    def test_roundtrip(self, tmp_path: Path) -> None:
        path = tmp_path / "style.yml"
        path.write_text(dump_style())
        assert load_style(path) == DEFAULT_STYLE

    def test_sections(self) -> None:
        data = yaml.safe_load(dump_style())
        assert list(data) == ["graph", "node", "edge", "start_node", "end_node"]

"""Shared test fixtures for fsm-chart."""

from pathlib import Path
from typing import Any

import pytest
import yaml

from fsm_chart.definitions import MappingDefinition


@pytest.fixture
def single_state_data() -> dict[str, Any]:
    """One state that is both initial and terminal."""
    return {
        "name": "single_state",
        "states": {
            "single": {
                "enter": ["foo", "bar"],
                "exit": ["baz", "quux"],
                "initial": True,
                "final": True,
            },
        },
    }


@pytest.fixture
def many_states_data() -> dict[str, Any]:
    """Three states exercising guards, callbacks and shared edges."""
    return {
        "name": "many_states",
        "initial": "a",
        "terminal": ["c"],
        "states": {
            "a": {"enter": "a enter", "exit": "a exit"},
            "b": {"enter": ["b1 enter", "b2 enter"], "exit": ["b1 exit", "b2 exit"]},
            "c": {},
        },
        "events": {
            "x": {
                "transitions": [
                    {"from": "a", "to": "a", "guard": "xa_guard"},
                    {"from": "b", "to": "c", "guard": ["xbc1_guard", "xbc2_guard"]},
                ],
            },
            "y": {
                "transitions": [
                    {"from": "a", "to": "b", "before": "y_before", "after": "y_after"},
                ],
            },
            "z": {
                "transitions": [
                    {
                        "from": "b",
                        "to": "a",
                        "before": ["z1_before", "z2_before"],
                        "after": ["z1_after", "z2_after"],
                    },
                ],
            },
            "many_from": {
                "transitions": [
                    {
                        "from": ["a", "b"],
                        "to": "c",
                        "guards": [["many_guard1", "many_guard2"], "many_guard3"],
                    },
                ],
            },
        },
    }


@pytest.fixture
def claim_data() -> dict[str, Any]:
    """An insurance-claim workflow with states given as a list."""
    return {
        "name": "claim",
        "states": [
            {"name": "draft", "initial": True},
            {"name": "submitted", "enter": "notify_reviewer"},
            {"name": "approved", "final": True},
            {"name": "rejected", "final": True},
        ],
        "events": {
            "submit": {"from": "draft", "to": "submitted", "if": "complete?"},
            "approve": {"from": "submitted", "to": "approved", "after": "pay"},
            "reject": {"from": "submitted", "to": "rejected", "unless": "valid?"},
        },
    }


@pytest.fixture
def single_state(single_state_data: dict[str, Any]) -> MappingDefinition:
    return MappingDefinition(single_state_data)


@pytest.fixture
def many_states(many_states_data: dict[str, Any]) -> MappingDefinition:
    return MappingDefinition(many_states_data)


@pytest.fixture
def claim(claim_data: dict[str, Any]) -> MappingDefinition:
    return MappingDefinition(claim_data)


@pytest.fixture
def many_states_file(tmp_path: Path, many_states_data: dict[str, Any]) -> Path:
    """Write the many-states machine to a YAML file and return the path."""
    path = tmp_path / "many_states.yml"
    path.write_text(yaml.safe_dump(many_states_data, sort_keys=False))
    return path

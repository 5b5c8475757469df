"""State machine definition sources.

The renderer reads machines through the ``MachineDefinition`` protocol.
Two adapters are provided: ``MappingDefinition`` for plain
mappings (and the YAML/JSON files they are loaded from), and
``TransitionsMachineDefinition`` for live ``transitions.Machine``
objects.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml

from fsm_chart.errors import DefinitionError
from fsm_chart.models import Guard, GuardGroup, GuardName, StateSpec, TransitionSpec

logger = logging.getLogger(__name__)

NEGATED_GUARD_PREFIX = "!"
_GUARD_KEYS = ("guard", "guards", "if")
_INITIAL_FLAGS = ("initial",)
_TERMINAL_FLAGS = ("final", "terminal")


@runtime_checkable
class MachineDefinition(Protocol):
    """Anything that can enumerate a state machine's states and transitions."""

    @property
    def name(self) -> str: ...

    def states(self) -> list[StateSpec]: ...

    def transitions(self) -> list[TransitionSpec]: ...

    def initial_states(self) -> list[str]: ...

    def terminal_states(self) -> list[str]: ...


def _callback_name(callback: Any) -> str:
    if isinstance(callback, str):
        return callback
    return getattr(callback, "__name__", None) or str(callback)


def _name_tuple(value: Any) -> tuple[str, ...]:
    """Promote a scalar or list of callbacks to a tuple of names."""
    if value is None or value == "":
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(_callback_name(v) for v in value if v is not None)
    return (_callback_name(value),)


def to_guard(value: Any) -> Guard:
    """Convert a name or (nested) list of names into a Guard."""
    if isinstance(value, (GuardName, GuardGroup)):
        return value
    if isinstance(value, (list, tuple)):
        return GuardGroup(tuple(to_guard(v) for v in value))
    return GuardName(_callback_name(value))


def _guards_from(value: Any) -> tuple[Guard, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(to_guard(v) for v in value)
    return (to_guard(value),)


def _negated(guards: tuple[Guard, ...]) -> tuple[Guard, ...]:
    result: list[Guard] = []
    for guard in guards:
        if isinstance(guard, GuardName):
            result.append(GuardName(NEGATED_GUARD_PREFIX + guard.name))
        else:
            result.append(GuardGroup(_negated(guard.members)))
    return tuple(result)


class MappingDefinition:
    """A machine described by a plain mapping (typically parsed YAML/JSON)."""

    def __init__(self, data: Mapping[str, Any], name: str | None = None) -> None:
        if not isinstance(data, Mapping):
            raise DefinitionError("Machine definition must be a mapping")
        if "states" not in data:
            raise DefinitionError("Machine definition has no 'states'")
        self._name = str(name or data.get("name") or "state_machine")
        self._state_data = self._normalize_states(data["states"])
        self._states = [
            self._read_state(state_name, attrs)
            for state_name, attrs in self._state_data.items()
        ]
        self._transitions = self._read_events(data.get("events") or {})
        self._initial = self._read_flagged(data.get("initial"), _INITIAL_FLAGS)
        if not self._initial and self._states:
            self._initial = [self._states[0].name]
        self._terminal = self._read_flagged(data.get("terminal"), _TERMINAL_FLAGS)

    @property
    def name(self) -> str:
        return self._name

    def states(self) -> list[StateSpec]:
        return list(self._states)

    def transitions(self) -> list[TransitionSpec]:
        return list(self._transitions)

    def initial_states(self) -> list[str]:
        return list(self._initial)

    def terminal_states(self) -> list[str]:
        return list(self._terminal)

    @staticmethod
    def _normalize_states(raw: Any) -> dict[str, dict[str, Any]]:
        states: dict[str, dict[str, Any]] = {}
        if isinstance(raw, Mapping):
            items = list(raw.items())
        elif isinstance(raw, list):
            items = []
            for entry in raw:
                if isinstance(entry, Mapping):
                    if "name" not in entry:
                        raise DefinitionError(f"State entry has no 'name': {entry!r}")
                    attrs = {k: v for k, v in entry.items() if k != "name"}
                    items.append((entry["name"], attrs))
                else:
                    items.append((entry, None))
        else:
            raise DefinitionError("'states' must be a mapping or a list")

        for state_name, attrs in items:
            if attrs is None:
                attrs = {}
            if not isinstance(attrs, Mapping):
                raise DefinitionError(f"State '{state_name}' must map to a mapping")
            states[str(state_name)] = dict(attrs)
        return states

    @staticmethod
    def _read_state(state_name: str, attrs: dict[str, Any]) -> StateSpec:
        try:
            return StateSpec(
                name=state_name,
                enter=_name_tuple(attrs.get("enter")),
                exit=_name_tuple(attrs.get("exit")),
            )
        except ValueError as exc:
            raise DefinitionError(str(exc)) from exc

    def _read_events(self, events: Any) -> list[TransitionSpec]:
        if not isinstance(events, Mapping):
            raise DefinitionError("'events' must be a mapping of event name to spec")
        specs: list[TransitionSpec] = []
        for event, body in events.items():
            body = body or {}
            if not isinstance(body, Mapping):
                raise DefinitionError(f"Event '{event}' must map to a mapping")
            entries = body.get("transitions")
            if entries is None:
                entries = [body]
            elif isinstance(entries, Mapping):
                entries = [entries]
            for entry in entries:
                if not isinstance(entry, Mapping):
                    raise DefinitionError(f"Transition of '{event}' must be a mapping")
                specs.append(self._read_transition(str(event), entry))
        return specs

    @staticmethod
    def _read_transition(event: str, entry: Mapping[str, Any]) -> TransitionSpec:
        guards: tuple[Guard, ...] = ()
        for key in _GUARD_KEYS:
            guards += _guards_from(entry.get(key))
        guards += _negated(_guards_from(entry.get("unless")))
        return TransitionSpec(
            sources=_name_tuple(entry.get("from")),
            targets=_name_tuple(entry.get("to")),
            event=event,
            guards=guards,
            before=_name_tuple(entry.get("before")),
            after=_name_tuple(entry.get("after")),
        )

    def _read_flagged(self, declared: Any, flags: tuple[str, ...]) -> list[str]:
        names = list(_name_tuple(declared))
        for state_name, attrs in self._state_data.items():
            if any(attrs.get(flag) for flag in flags) and state_name not in names:
                names.append(state_name)
        return names


def load_definition(path: Path) -> MappingDefinition:
    """Load a machine definition from a YAML or JSON file."""
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as exc:
        raise DefinitionError(f"Cannot read {path}: {exc}") from exc

    if path.suffix == ".json":
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DefinitionError(f"Invalid JSON in {path}: {exc}") from exc
    else:
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DefinitionError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise DefinitionError(f"Invalid machine format in {path}: expected mapping")
    definition = MappingDefinition(raw, name=raw.get("name") or path.stem)
    logger.debug(
        "Loaded %s from %s: %d states, %d transitions",
        definition.name,
        path,
        len(definition.states()),
        len(definition.transitions()),
    )
    return definition


class TransitionsMachineDefinition:
    """Adapter for a ``transitions.Machine`` instance."""

    def __init__(
        self,
        machine: Any,
        terminal: list[str] | None = None,
        name: str | None = None,
    ) -> None:
        self._machine = machine
        self._terminal = terminal
        self._name = name or getattr(machine, "name", "") or "state_machine"

    @property
    def name(self) -> str:
        # transitions stores named machines as "<name>: "
        return self._name.strip().rstrip(":").strip() or "state_machine"

    def states(self) -> list[StateSpec]:
        return [
            MappingDefinition._read_state(
                state_name,
                {"enter": list(state.on_enter), "exit": list(state.on_exit)},
            )
            for state_name, state in self._machine.states.items()
        ]

    def transitions(self) -> list[TransitionSpec]:
        specs: list[TransitionSpec] = []
        for event_name, event in self._machine.events.items():
            if self._is_auto_transition(event_name):
                continue
            for source, transitions in event.transitions.items():
                for t in transitions:
                    guards = tuple(
                        GuardName(
                            ("" if c.target else NEGATED_GUARD_PREFIX)
                            + _callback_name(c.func)
                        )
                        for c in t.conditions
                    )
                    specs.append(TransitionSpec(
                        sources=(source,),
                        targets=(t.dest if t.dest is not None else source,),
                        event=event_name,
                        guards=guards,
                        before=_name_tuple(list(t.before)),
                        after=_name_tuple(list(t.after)),
                    ))
        return specs

    def initial_states(self) -> list[str]:
        initial = self._machine.initial
        return [initial] if initial else []

    def terminal_states(self) -> list[str]:
        if self._terminal is not None:
            return list(self._terminal)
        return [
            state_name
            for state_name, state in self._machine.states.items()
            if getattr(state, "final", False)
        ]

    def _is_auto_transition(self, event_name: str) -> bool:
        if not getattr(self._machine, "auto_transitions", False):
            return False
        return event_name.startswith("to_") and event_name[3:] in self._machine.states

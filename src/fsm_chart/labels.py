"""Label formatting for chart nodes and edges.

Every function here is pure and tolerant of empty input: an empty or
missing list means "leave this part of the label out", never an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from html import escape
from typing import Any

from fsm_chart.models import GuardGroup, GuardName, TransitionSpec

ENTER_PREFIX = "enter state action: "
EXIT_PREFIX = "exit state action: "

_TABLE_OPEN = '<<table BORDER="0" CELLBORDER="1">'
_TABLE_CLOSE = "</table>>"
_ACTION_FONT = '<FONT FACE="Arial:italic" POINT-SIZE="10" COLOR="gray20">'
_ENTER_ROW = '<tr><td SIDES="B" ALIGN="LEFT" COLOR="gray40">' + _ACTION_FONT + "{}</FONT></td></tr>"
_NAME_ROW = '<tr><td BORDER="0" ALIGN="CENTER">{}</td></tr>'
_EXIT_ROW = '<tr><td SIDES="T" ALIGN="RIGHT" COLOR="gray40">' + _ACTION_FONT + "{}</FONT></td></tr>"


def _names(names: Iterable[str] | str | None) -> list[str]:
    if not names:
        return []
    if isinstance(names, str):
        return [names]
    return [str(n) for n in names if n]


def format_enter_label(names: Iterable[str] | str | None) -> str:
    """Return ``"enter state action: a, b"`` or ``""`` when there are none."""
    items = _names(names)
    return ENTER_PREFIX + ", ".join(items) if items else ""


def format_exit_label(names: Iterable[str] | str | None) -> str:
    """Return ``"exit state action: a, b"`` or ``""`` when there are none."""
    items = _names(names)
    return EXIT_PREFIX + ", ".join(items) if items else ""


def flatten_guards(guards: Any) -> Iterator[str]:
    """Yield guard names in declared order, descending into groups."""
    if guards is None:
        return
    if isinstance(guards, (str, GuardName, GuardGroup)):
        guards = (guards,)
    for guard in guards:
        if guard is None:
            continue
        if isinstance(guard, GuardName):
            yield guard.name
        elif isinstance(guard, GuardGroup):
            yield from flatten_guards(guard.members)
        elif isinstance(guard, str):
            yield guard
        elif isinstance(guard, (list, tuple)):
            yield from flatten_guards(guard)
        else:
            yield str(guard)


def format_guard_suffix(guards: Any) -> str:
    """Render all guard names as one bracketed list, e.g. ``"[g1, g2]"``.

    AND-groups and OR-alternatives are shown alike: the chart lists every
    guard that can admit the transition.
    """
    names = list(flatten_guards(guards))
    return "[" + ", ".join(names) + "]" if names else ""


def format_edge_label(
    event: str | None,
    guard_suffix: str | None = "",
    before: Iterable[str] | str | None = None,
    after: Iterable[str] | str | None = None,
) -> str:
    """Render ``"<event> <guards> / <before...> <after...>"``.

    The guard part and the callback part are each left out when empty.
    """
    callbacks = _names(before) + _names(after)
    suffix = "/ " + " ".join(callbacks) if callbacks else ""
    return f"{event or ''} {guard_suffix or ''} {suffix}".strip()


def format_transition_label(spec: TransitionSpec) -> str:
    return format_edge_label(
        spec.event, format_guard_suffix(spec.guards), spec.before, spec.after
    )


def format_node_label(
    name: str,
    enter: Iterable[str] | str | None = None,
    exit: Iterable[str] | str | None = None,
    hide_enter_exit: bool = False,
) -> str:
    """Render a state as a Graphviz HTML table.

    Rows, top to bottom: entry actions, the upper-cased state name, exit
    actions. The action rows are dropped when empty or hidden.
    """
    rows: list[str] = []
    if not hide_enter_exit:
        enter_text = format_enter_label(enter)
        if enter_text:
            rows.append(_ENTER_ROW.format(escape(enter_text, quote=False)))
    rows.append(_NAME_ROW.format(escape(name.upper(), quote=False)))
    if not hide_enter_exit:
        exit_text = format_exit_label(exit)
        if exit_text:
            rows.append(_EXIT_ROW.format(escape(exit_text, quote=False)))
    return _TABLE_OPEN + "\n".join(rows) + _TABLE_CLOSE

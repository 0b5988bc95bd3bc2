"""Stack status classification from container states.

Rules are evaluated in order and the first match wins. Several predicates
overlap (paused together with restarting containers matches both the
"Partial" and "Restarting" rules), so the order below is the policy.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import NamedTuple

from cm_common.models.container import Container
from cm_common.models.stack import StackStatus


class StateFlags(NamedTuple):
    is_up: bool = False
    is_running: bool = False
    is_exited: bool = False
    is_paused: bool = False
    is_restarting: bool = False


_RULES: tuple[tuple[Callable[[StateFlags], bool], str, str], ...] = (
    (lambda f: not f.is_up, "Stopped", "status-stopped"),
    (lambda f: f.is_exited and not f.is_running, "Exited", "status-exited"),
    (
        lambda f: f.is_running and not f.is_exited and not f.is_paused and not f.is_restarting,
        "Running",
        "status-running",
    ),
    (
        lambda f: f.is_paused and not f.is_exited and not f.is_running and not f.is_restarting,
        "Paused",
        "status-paused",
    ),
    (lambda f: f.is_paused and not f.is_exited, "Partial", "status-partial"),
    (lambda f: f.is_restarting, "Restarting", "status-restarting"),
)


def get_stack_status(
    is_up: bool,
    is_running: bool,
    is_exited: bool,
    is_paused: bool,
    is_restarting: bool,
) -> StackStatus:
    """Map container-state flags to a status label and CSS class."""
    flags = StateFlags(is_up, is_running, is_exited, is_paused, is_restarting)
    for matches, text, css_class in _RULES:
        if matches(flags):
            return StackStatus(text=text, css_class=css_class)
    return StackStatus(text="Mixed", css_class="status-mixed")


def state_flags(containers: Iterable[Container]) -> StateFlags:
    states = [c.state for c in containers]
    return StateFlags(
        is_up=bool(states),
        is_running="running" in states,
        is_exited="exited" in states,
        is_paused="paused" in states,
        is_restarting="restarting" in states,
    )


def classify(containers: Iterable[Container]) -> StackStatus:
    """Status of a stack given the containers labelled with its project."""
    return get_stack_status(*state_flags(containers))

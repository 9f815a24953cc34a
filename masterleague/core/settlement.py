"""Bet status state machine.

    Pendente ──► Ganhou
        │
        └──────► Perdeu

``Pendente`` is the only initial state; ``Ganhou`` and ``Perdeu`` are
terminal.  There is no way back out of a terminal state.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Final

from masterleague.core.errors import InvalidTransition
from masterleague.core.records import STATUS_LOST, STATUS_PENDING, STATUS_WON

_TRANSITIONS: Final[Dict[str, FrozenSet[str]]] = {
    STATUS_PENDING: frozenset({STATUS_WON, STATUS_LOST}),
    STATUS_WON: frozenset(),
    STATUS_LOST: frozenset(),
}

TERMINAL_STATUSES: Final[FrozenSet[str]] = frozenset({STATUS_WON, STATUS_LOST})


def can_transition(current: str, requested: str) -> bool:
    return requested in _TRANSITIONS.get(current, frozenset())


def check_transition(current: str, requested: str) -> None:
    """Raise :class:`InvalidTransition` unless ``current → requested`` is allowed."""
    if not can_transition(current, requested):
        raise InvalidTransition(current, requested)

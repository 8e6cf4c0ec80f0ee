# wizard_scorer/agents/base.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..state import Player, RoundState


@runtime_checkable
class NameSource(Protocol):
    """
    Supplies player names while the roster is being filled.

    Called once per seat, in increasing seat order. A seat is asked again
    only if the previous answer was rejected (empty or duplicate name).
    """

    def __call__(self, seat_index: int) -> str:
        """Return the display name for `seat_index`."""

        raise NotImplementedError


@runtime_checkable
class InputSource(Protocol):
    """
    Supplies bids and trick counts while a round is in progress.

    `phase` is TIPPING or RETIPPING when a bid is wanted and PLAYING when the
    number of tricks the player actually won is wanted. The returned value
    must fit in 0..255; it is not checked against the round number.
    """

    def __call__(self, current_player: Player, phase: RoundState) -> int:
        """Return the bid or trick count of `current_player`."""

        raise NotImplementedError

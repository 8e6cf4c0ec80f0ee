# wizard_scorer/agents/random_agent.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Set
import random

from ..state import Player, RoundState
from .base import InputSource

if TYPE_CHECKING:
    from ..engine import Wizard


@dataclass
class RandomScoreAgent(InputSource):
    """
    A baseline input source for unattended games:

    - bids: uniform in 0..round_number (a retip simply draws again).
    - tricks: every trick of the round goes to a random player, so the counts
      of one playing circuit always add up to the round number.
    """

    rng: random.Random
    game: "Wizard"
    _tricks: Dict[str, int] = field(default_factory=dict, init=False, repr=False)
    _reported: Set[str] = field(default_factory=set, init=False, repr=False)

    def __call__(self, current_player: Player, phase: RoundState) -> int:
        round_number = self.game.round_index
        if phase.is_bidding:
            return self.rng.randint(0, round_number)

        # A name seen twice means a new circuit (or a new round) has begun.
        # Relies on every dealt circuit totalling the round number, so a
        # playing circuit is never replayed with the same split.
        if not self._tricks or current_player.name in self._reported:
            self._deal_tricks(round_number)
        self._reported.add(current_player.name)
        return self._tricks.get(current_player.name, 0)

    def _deal_tricks(self, round_number: int) -> None:
        names = [p.name for p in self.game.active_round.players]
        tricks = {name: 0 for name in names}
        for _ in range(round_number):
            tricks[self.rng.choice(names)] += 1
        self._tricks = tricks
        self._reported = set()


@dataclass
class SeatNames:
    """Name source handing out `prefix` + seat number, e.g. "Player 1"."""

    prefix: str = "Player "

    def __call__(self, seat_index: int) -> str:
        return f"{self.prefix}{seat_index + 1}"

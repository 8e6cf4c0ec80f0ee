# wizard_scorer/rounds.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .rules import matches_round_number, score_round
from .state import InvalidStateError, Player, RoundState, Tips

logger = logging.getLogger(__name__)


class Round:
    """
    Bid -> play -> score state machine for a single deal.

    The round works on its own copies of the players it is given, in the
    order it is given them. Every call to `step` consumes at most one value
    for the player at the turn cursor; scoring happens in one extra step once
    all tricks are in, after which the round is finished and ignores further
    calls.
    """

    def __init__(self, round_number: int, players: Iterable[Player]) -> None:
        if round_number < 1:
            raise ValueError("round_number must be positive")

        self.round_number = round_number
        self._players: List[Player] = [p.copy() for p in players]
        if not self._players:
            raise ValueError("A round needs at least one player")
        names = [p.name for p in self._players]
        if len(set(names)) != len(names):
            raise ValueError(f"Player names must be unique: {names}")

        self._state = RoundState.TIPPING
        self._bids = Tips()
        self._actual = Tips()
        self._cursor = 0
        self._deltas: Dict[str, int] = {}

        # Number of extra circuits forced by the replay rule.
        self.retip_count = 0
        self.replay_count = 0

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def players(self) -> Tuple[Player, ...]:
        return tuple(p.copy() for p in self._players)

    @property
    def bids(self) -> Tips:
        return self._bids.copy()

    @property
    def actual(self) -> Tips:
        return self._actual.copy()

    @property
    def turn_cursor(self) -> int:
        return self._cursor

    @property
    def current_player(self) -> Player:
        return self._players[self._cursor].copy()

    @property
    def awaiting_input(self) -> bool:
        """True if the next `step` call needs a bid or trick count."""
        return self._state.is_bidding or self._state is RoundState.PLAYING

    @property
    def is_finished(self) -> bool:
        return self._state is RoundState.END

    @property
    def score_deltas(self) -> Dict[str, int]:
        """Points each player gained or lost this round (empty until scored)."""
        return dict(self._deltas)

    # -------------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------------

    def step(self, value: Optional[int] = None) -> RoundState:
        """
        Advance the round by one step and return the new state.

        `value` is the bid (Tipping/Retipping) or the number of tricks won
        (Playing) of `current_player`. It is ignored in Checking and End.
        """
        state = self._state
        if state is RoundState.TIPPING or state is RoundState.RETIPPING:
            self._record(self._bids, value)
            if self._end_of_circuit():
                self._finish_bidding()
        elif state is RoundState.PLAYING:
            self._record(self._actual, value)
            if self._end_of_circuit():
                self._finish_playing()
        elif state is RoundState.CHECKING:
            self._check()
        elif state is RoundState.END:
            pass
        else:
            raise InvalidStateError(f"Unknown round state {state!r}")
        return self._state

    def _record(self, tips: Tips, value: Optional[int]) -> None:
        if value is None:
            raise InvalidStateError(
                f"Round {self.round_number} needs a value in state "
                f"{self._state.name}"
            )
        player = self._players[self._cursor]
        tips.add(player, value)
        logger.debug(
            "Round %d %s: %s -> %d",
            self.round_number,
            self._state.name,
            player.name,
            value,
        )

    def _end_of_circuit(self) -> bool:
        """Move the cursor on; True if every player has just had a turn."""
        if self._cursor + 1 == len(self._players):
            self._cursor = 0
            return True
        self._cursor += 1
        return False

    def _finish_bidding(self) -> None:
        total = self._bids.sum()
        if matches_round_number(total, self.round_number):
            self.retip_count += 1
            logger.info(
                "Round %d: bids sum to %d, everyone bids again",
                self.round_number,
                total,
            )
            self._state = RoundState.RETIPPING
        else:
            self._state = RoundState.PLAYING

    def _finish_playing(self) -> None:
        total = self._actual.sum()
        if matches_round_number(total, self.round_number):
            self._state = RoundState.CHECKING
        else:
            self.replay_count += 1
            logger.info(
                "Round %d: %d tricks entered for %d cards, entering again",
                self.round_number,
                total,
                self.round_number,
            )

    def _check(self) -> None:
        self._deltas = score_round(self._bids, self._actual, self._players)
        for p in self._players:
            p.points += self._deltas[p.name]
        self._state = RoundState.END

    def __str__(self) -> str:
        lines = [str(p) for p in self._players]
        lines.append(self._state.name)
        return "\n".join(lines)

# wizard_scorer/engine.py
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .agents.base import InputSource, NameSource
from .rounds import Round
from .rules import round_budget
from .state import (
    InvalidInputError,
    InvalidStateError,
    Player,
    RoundState,
    WizardState,
)

logger = logging.getLogger(__name__)


class Wizard:
    """
    Step-driven scorekeeping session for a full Wizard game.

    This module is *pure* game logic: no terminal, no files. The caller keeps
    invoking `step` with a name source and an input source (see
    `agents.base`) until `state` is `WizardState.END`. Each call performs one
    atomic transition and returns control.
    """

    def __init__(self, player_count: int, game_label: Optional[str] = None) -> None:
        # Raises ValueError for counts the deck cannot serve.
        self.round_budget = round_budget(player_count)
        self.player_count = player_count
        self.game_label = game_label

        self._state = WizardState.INIT
        self._roster_cursor = 0
        self._round_index = 0
        self._players: List[Player] = []
        self._history: List[Round] = []
        self._active_round: Optional[Round] = None

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def round_index(self) -> int:
        """Number of the round in progress, or of the last one started."""
        return self._round_index

    @property
    def roster_cursor(self) -> int:
        return self._roster_cursor

    @property
    def players(self) -> Tuple[Player, ...]:
        return tuple(p.copy() for p in self._players)

    @property
    def history(self) -> Tuple[Round, ...]:
        return tuple(self._history)

    @property
    def has_active_round(self) -> bool:
        return self._active_round is not None

    @property
    def active_round(self) -> Round:
        if self._active_round is None:
            raise InvalidStateError(
                f"No round in progress (state {self._state.name})"
            )
        return self._active_round

    @property
    def round_state(self) -> RoundState:
        return self.active_round.state

    @property
    def current_player(self) -> Player:
        return self.active_round.current_player

    @property
    def is_finished(self) -> bool:
        return self._state is WizardState.END

    # -------------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------------

    def step(self, name_source: NameSource, input_source: InputSource) -> WizardState:
        """
        Advance the session by one step and return the new state.

        `name_source` is only consulted while filling the roster and
        `input_source` only when the active round needs a bid or trick count.
        """
        state = self._state
        if state is WizardState.INIT:
            self._add_player(name_source(self._roster_cursor))
        elif state is WizardState.NEXT_ROUND:
            self._start_round()
        elif state is WizardState.PLAYING:
            self._play(input_source)
        elif state is WizardState.END_ROUND:
            self._end_round()
        elif state is WizardState.END:
            pass
        else:
            raise InvalidStateError(f"Unknown game state {state!r}")
        return self._state

    def _add_player(self, name: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidInputError(f"Seat {self._roster_cursor} needs a name")
        if any(p.name == name for p in self._players):
            raise InvalidInputError(f"Player name {name!r} is already taken")

        self._players.append(Player(name=name))
        logger.debug("Seat %d: %s", self._roster_cursor, name)

        if self._roster_cursor + 1 == self.player_count:
            self._roster_cursor = 0
            self._state = WizardState.NEXT_ROUND
        else:
            self._roster_cursor += 1

    def _start_round(self) -> None:
        self._round_index += 1
        self._active_round = Round(self._round_index, self._players)
        self._state = WizardState.PLAYING

    def _play(self, input_source: InputSource) -> None:
        current_round = self.active_round
        if current_round.is_finished:
            self._state = WizardState.END_ROUND
            return

        value = None
        if current_round.awaiting_input:
            value = input_source(current_round.current_player, current_round.state)
        current_round.step(value)

        if current_round.is_finished:
            logger.info(
                "Finished round %d/%d%s",
                self._round_index,
                self.round_budget,
                f" for {self.game_label}" if self.game_label else "",
            )
            if self._round_index == self.round_budget:
                self._finish_game()

    def _end_round(self) -> None:
        finished = self.active_round
        self._history.append(finished)
        players = list(finished.players)
        # Dealer moves one seat: whoever went first goes last next round.
        self._players = players[1:] + players[:1]
        self._active_round = None
        self._state = WizardState.NEXT_ROUND

    def _finish_game(self) -> None:
        final_round = self.active_round
        self._history.append(final_round)
        self._players = list(final_round.players)
        self._active_round = None
        self._state = WizardState.END
        logger.info(
            "Finished game%s",
            f" {self.game_label}" if self.game_label else "",
        )

    def __str__(self) -> str:
        return " ".join(str(p) for p in self._players)

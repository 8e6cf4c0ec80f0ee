# wizard_scorer/agents/console_agent.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..state import MAX_TIP, Player, RoundState
from .base import InputSource, NameSource

logger = logging.getLogger(__name__)

PHASE_PROMPTS = {
    RoundState.TIPPING: "bid",
    RoundState.RETIPPING: "bid again",
    RoundState.PLAYING: "tricks won",
}


@dataclass
class ConsoleNameSource(NameSource):
    """Asks for player names on the terminal until a non-empty one is typed."""

    prompt: Callable[[str], str] = input

    def __call__(self, seat_index: int) -> str:
        while True:
            name = self.prompt(f"Name of player {seat_index + 1}: ").strip()
            if name:
                return name
            logger.warning("Player %d needs a name", seat_index + 1)


@dataclass
class ConsoleInputSource(InputSource):
    """
    Asks for bids and trick counts on the terminal.

    Anything that is not a whole number in 0..255 is rejected and asked for
    again; the game core never sees it.
    """

    prompt: Callable[[str], str] = input

    def __call__(self, current_player: Player, phase: RoundState) -> int:
        label = PHASE_PROMPTS.get(phase, phase.value)
        while True:
            raw = self.prompt(f"{current_player.name} ({label}): ").strip()
            try:
                value = int(raw)
            except ValueError:
                logger.warning("Not a number: %r", raw)
                continue
            if 0 <= value <= MAX_TIP:
                return value
            logger.warning("%d is outside 0..%d", value, MAX_TIP)

# wizard_scorer/state.py
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

# Bids and trick counts are stored as unsigned 8-bit values.
MAX_TIP = 255


class InvalidStateError(RuntimeError):
    """Raised when an operation is not legal in the current state."""


class InvalidInputError(ValueError):
    """Raised when a supplied name or count cannot be recorded."""


class RoundState(enum.Enum):
    TIPPING = "tipping"
    RETIPPING = "retipping"
    PLAYING = "playing"
    CHECKING = "checking"
    END = "end"

    @property
    def is_bidding(self) -> bool:
        return self in (RoundState.TIPPING, RoundState.RETIPPING)


class WizardState(enum.Enum):
    INIT = "init"
    NEXT_ROUND = "next_round"
    PLAYING = "playing"
    END_ROUND = "end_round"
    END = "end"


@dataclass
class Player:
    name: str
    points: int = 0

    def copy(self) -> "Player":
        return Player(name=self.name, points=self.points)

    def __str__(self) -> str:
        return f"{self.name}: {self.points}"


def validate_tip(value: object) -> int:
    """Return `value` if it fits the 0..255 range, else raise InvalidInputError."""
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"Expected an integer count, got {value!r}")
    if not 0 <= value <= MAX_TIP:
        raise InvalidInputError(
            f"Count {value} is outside the range 0..{MAX_TIP}"
        )
    return value


@dataclass
class Tips:
    """
    Per-player counts for one phase of a round.

    Used both for bids and for the number of tricks actually won. Recording a
    value for a player that already has one overwrites it.
    """

    entries: Dict[str, int] = field(default_factory=dict)

    def add(self, player: Player, value: int) -> None:
        self.entries[player.name] = validate_tip(value)

    def get(self, player: Player) -> Optional[int]:
        return self.entries.get(player.name)

    def sum(self) -> int:
        return sum(self.entries.values())

    def copy(self) -> "Tips":
        return Tips(entries=dict(self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

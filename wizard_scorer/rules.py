# wizard_scorer/rules.py
from __future__ import annotations

from typing import Dict, Iterable

from .state import Player, Tips

# Size of the Wizard deck; the number of rounds is derived from it.
DECK_SIZE = 60


def round_budget(player_count: int) -> int:
    """
    Number of rounds in a game for `player_count` players.

    Every player holds `round_number` cards in round `round_number`, so the
    deck runs out after DECK_SIZE // player_count rounds.
    """
    if player_count < 1:
        raise ValueError("A game needs at least one player")
    budget = DECK_SIZE // player_count
    if budget < 1:
        raise ValueError(
            f"{player_count} players cannot share a {DECK_SIZE} card deck"
        )
    return budget


def matches_round_number(total: int, round_number: int) -> bool:
    """
    True if a phase total equals the number of cards dealt.

    A bidding circuit with such a total has to be repeated by every player
    (retipping). A playing circuit only counts once its total does match;
    otherwise every player enters the tricks again.
    """
    return total == round_number


def score_delta(bid: int, won: int) -> int:
    """
    Score one player's round according to Wizard scoring:

    - If won == bid: 20 + 10 * bid
    - Else: -10 * abs(won - bid)
    """
    diff = abs(bid - won)
    if diff == 0:
        return 20 + 10 * bid
    return -10 * diff


def score_round(
    bids: Tips,
    actual: Tips,
    players: Iterable[Player],
) -> Dict[str, int]:
    """Return the score delta for every player, keyed by player name."""
    deltas: Dict[str, int] = {}
    for p in players:
        bid = bids.get(p)
        won = actual.get(p)
        if bid is None or won is None:
            raise ValueError(f"Player {p.name!r} has no bid or trick count")
        deltas[p.name] = score_delta(bid, won)
    return deltas

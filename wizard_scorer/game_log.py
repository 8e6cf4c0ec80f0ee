# wizard_scorer/game_log.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .rounds import Round

FIELDNAMES = [
    "game_id",
    "round_number",
    "seat",
    "player_name",
    "bid",
    "tricks_won",
    "round_delta",
    "total_score",
    "retips",
    "replays",
]


def build_round_score_rows(
    history: Iterable[Round],
    game_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Build a list of rows summarizing per-round scores for display.

    Each row corresponds to (round, player) and has keys in FIELDNAMES.
    `seat` is the player's position in that round's turn order. Rounds that
    were never scored are skipped so a game in progress can still be shown.
    """
    rows: List[Dict[str, Any]] = []

    for round_ in history:
        if not round_.is_finished:
            continue
        bids = round_.bids
        actual = round_.actual
        deltas = round_.score_deltas

        for seat, p in enumerate(round_.players):
            rows.append(
                {
                    "game_id": game_id,
                    "round_number": round_.round_number,
                    "seat": seat,
                    "player_name": p.name,
                    "bid": bids.get(p),
                    "tricks_won": actual.get(p),
                    "round_delta": deltas[p.name],
                    "total_score": p.points,
                    "retips": round_.retip_count,
                    "replays": round_.replay_count,
                }
            )

    return rows

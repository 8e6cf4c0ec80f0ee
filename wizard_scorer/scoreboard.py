# wizard_scorer/scoreboard.py
from __future__ import annotations

from typing import Iterable, Optional

import matplotlib.pyplot as plt
import pandas as pd

from .game_log import FIELDNAMES, build_round_score_rows
from .rounds import Round
from .state import Player


def history_frame(
    history: Iterable[Round],
    game_id: Optional[str] = None,
) -> pd.DataFrame:
    """One row per (round, player); columns are game_log.FIELDNAMES."""
    rows = build_round_score_rows(history, game_id=game_id)
    return pd.DataFrame(rows, columns=FIELDNAMES)


def score_table(history: Iterable[Round]) -> pd.DataFrame:
    """
    Running totals with one row per round and one column per player.

    Columns follow the seat order of the first round, which is the order the
    players were entered in.
    """
    df = history_frame(history)
    if df.empty:
        return pd.DataFrame()
    names = list(df["player_name"].unique())
    table = df.pivot(index="round_number", columns="player_name", values="total_score")
    table = table.reindex(columns=names)
    table.columns.name = None
    return table


def standings(players: Iterable[Player]) -> pd.DataFrame:
    """Players ranked by points; tied players share a rank."""
    df = pd.DataFrame(
        [{"player_name": p.name, "points": p.points} for p in players],
        columns=["player_name", "points"],
    )
    df = df.sort_values("points", ascending=False, kind="stable").reset_index(drop=True)
    df.insert(0, "rank", df["points"].rank(method="min", ascending=False).astype(int))
    return df


def plot_totals(history: Iterable[Round], ax: Optional[plt.Axes] = None) -> plt.Axes:
    """Line chart of every player's running total per round."""
    table = score_table(history)
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 6))

    for name in table.columns:
        ax.plot(table.index, table[name], marker="o", label=name)

    ax.axhline(0, linestyle="--", linewidth=0.8)
    ax.set_xlabel("Round")
    ax.set_ylabel("Total score")
    ax.set_title("Running total per round")
    ax.grid(True, linestyle=":", alpha=0.5)
    if len(table.columns):
        ax.legend()
    return ax

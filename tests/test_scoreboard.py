import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from wizard_scorer.game_log import FIELDNAMES  # noqa: E402
from wizard_scorer.rounds import Round  # noqa: E402
from wizard_scorer.scoreboard import (  # noqa: E402
    history_frame,
    plot_totals,
    score_table,
    standings,
)
from wizard_scorer.state import Player  # noqa: E402


def _play_round(round_number, players, bids, tricks):
    round_ = Round(round_number, players)
    for v in list(bids) + list(tricks):
        round_.step(v)
    round_.step()
    return round_


def _sample_history():
    first = _play_round(
        1,
        [Player("Ann"), Player("Bob"), Player("Cid")],
        bids=[1, 0, 1],
        tricks=[1, 0, 0],
    )
    after = list(first.players)
    second = _play_round(
        2,
        after[1:] + after[:1],
        bids=[2, 0, 1],
        tricks=[1, 0, 1],
    )
    return [first, second]


def test_history_frame_columns_and_length():
    df = history_frame(_sample_history(), game_id="g1")
    assert list(df.columns) == FIELDNAMES
    assert len(df) == 6
    assert set(df["game_id"]) == {"g1"}


def test_history_frame_empty():
    df = history_frame([])
    assert df.empty
    assert list(df.columns) == FIELDNAMES


def test_score_table_rounds_by_players():
    table = score_table(_sample_history())

    assert list(table.columns) == ["Ann", "Bob", "Cid"]
    assert list(table.index) == [1, 2]
    assert table.loc[1].tolist() == [30, 20, -10]
    # Bob -10, Cid +20, Ann +30 in round two
    assert table.loc[2].tolist() == [60, 10, 10]


def test_score_table_empty_history():
    assert score_table([]).empty


def test_standings_rank_with_ties():
    players = [Player("Ann", 10), Player("Bob", 60), Player("Cid", 10)]
    df = standings(players)

    assert df["player_name"].tolist() == ["Bob", "Ann", "Cid"]
    assert df["points"].tolist() == [60, 10, 10]
    assert df["rank"].tolist() == [1, 2, 2]


def test_plot_totals_draws_one_line_per_player():
    fig, ax = plt.subplots()
    returned = plot_totals(_sample_history(), ax=ax)

    assert returned is ax
    # One line per player plus the zero line.
    assert len(ax.get_lines()) == 4
    assert ax.get_legend() is not None
    plt.close(fig)


def test_plot_totals_creates_axes(tmp_path):
    ax = plot_totals(_sample_history())
    path = tmp_path / "totals.png"
    ax.figure.savefig(path)
    assert path.exists()
    plt.close(ax.figure)

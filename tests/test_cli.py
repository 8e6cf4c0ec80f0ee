import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from wizard_scorer import cli  # noqa: E402
from wizard_scorer.engine import Wizard  # noqa: E402
from wizard_scorer.state import InvalidInputError, RoundState, WizardState  # noqa: E402
from wizard_scorer.verbose_logger import VerboseGameLogger  # noqa: E402


def test_parse_args_defaults(monkeypatch):
    monkeypatch.delenv("WIZARD_PLAYERS", raising=False)
    monkeypatch.delenv("WIZARD_LOG_LEVEL", raising=False)
    args = cli.parse_args([])
    assert args.players == cli.DEFAULT_PLAYERS
    assert args.names is None
    assert not args.auto
    assert args.seed == 0
    assert args.log_level == "INFO"


def test_parse_args_reads_environment(monkeypatch):
    monkeypatch.setenv("WIZARD_PLAYERS", "5")
    monkeypatch.setenv("WIZARD_LOG_LEVEL", "DEBUG")
    args = cli.parse_args([])
    assert args.players == 5
    assert args.log_level == "DEBUG"


def test_parse_args_ignores_bad_environment(monkeypatch):
    monkeypatch.setenv("WIZARD_PLAYERS", "many")
    assert cli.parse_args([]).players == cli.DEFAULT_PLAYERS


@pytest.mark.parametrize("count", ["2", "7"])
def test_play_rejects_player_count(count):
    with pytest.raises(SystemExit):
        cli.play(cli.parse_args(["--players", count, "--auto"]))


def test_play_rejects_wrong_or_duplicate_names():
    with pytest.raises(SystemExit):
        cli.play(cli.parse_args(["--players", "3", "--names", "A", "B"]))
    with pytest.raises(SystemExit):
        cli.play(cli.parse_args(["--players", "3", "--names", "A", "A", "B"]))


def test_auto_game_runs_to_completion(tmp_path, capsys):
    log_path = tmp_path / "transcript.txt"
    plot_path = tmp_path / "totals.png"
    game = cli.play(
        cli.parse_args(
            [
                "--players",
                "6",
                "--auto",
                "--seed",
                "3",
                "--names",
                "Ann",
                "Bob",
                "Cid",
                "Dee",
                "Eve",
                "Fay",
                "--game-id",
                "g-1",
                "--verbose-log",
                str(log_path),
                "--plot",
                str(plot_path),
            ]
        )
    )

    assert game.state == WizardState.END
    assert len(game.history) == 10

    out = capsys.readouterr().out
    assert "Round 1/10" in out
    assert "Round 10/10" in out
    assert "Final standings" in out

    transcript = log_path.read_text(encoding="utf-8")
    assert "=== Round 10 | Game: g-1 ===" in transcript
    assert "Game: g-1 | Round: 1 | Phase: TIPPING | Ann -> " in transcript
    assert plot_path.exists()


def test_run_game_reports_each_round_once():
    game = Wizard(6)
    names = iter(["A", "B", "C", "D", "E", "F"])

    def source(_player, phase):
        if phase.is_bidding:
            return 0
        return game.round_index if game.active_round.turn_cursor == 0 else 0

    reported = []
    cli.run_game(
        game,
        lambda _seat: next(names),
        source,
        on_round_end=lambda g, r: reported.append(r.round_number),
    )
    assert reported == list(range(1, 11))


def test_run_game_asks_again_for_rejected_names(caplog):
    game = Wizard(3)
    names = iter(["A", "A", "B", "", "C"])
    answers = {RoundState.TIPPING: 0}

    def source(_player, phase):
        if phase in answers:
            return answers[phase]
        return game.round_index if game.active_round.turn_cursor == 0 else 0

    with caplog.at_level("WARNING"):
        cli.run_game(game, lambda _seat: next(names), source)

    assert [p.name for p in game.history[0].players] == ["A", "B", "C"]
    assert len(caplog.records) == 2


def test_run_game_propagates_round_errors():
    game = Wizard(3)
    with pytest.raises(InvalidInputError):
        cli.run_game(game, lambda seat: f"P{seat}", lambda *_: 300)


def test_verbose_logger_records_transitions(tmp_path):
    path = tmp_path / "nested" / "log.txt"
    verbose = VerboseGameLogger(path)
    game = Wizard(3)
    names = iter(["A", "B", "C"])
    bids = iter([1, 0, 0])

    def source(_player, phase):
        if phase.is_bidding:
            return next(bids, 0)
        return game.round_index if game.active_round.turn_cursor == 0 else 0

    cli.run_game(game, lambda _seat: next(names), source, verbose_logger=verbose)
    verbose.flush()

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Round: 1 | Phase: TIPPING | A -> 1"
    assert lines[2] == "Round: 1 | Phase: TIPPING | C -> 0 => RETIPPING"
    assert "=== Round 1 ===" in lines
    assert "Retips: 1 | Replays: 0" in lines


def test_verbose_logger_flush_without_entries(tmp_path):
    path = tmp_path / "empty.txt"
    VerboseGameLogger(path).flush()
    assert not path.exists()


@pytest.mark.parametrize("blank", ["", "   "])
def test_play_rejects_blank_names(blank):
    with pytest.raises(SystemExit):
        cli.play(cli.parse_args(["--players", "3", "--names", blank, "B", "C"]))


def test_run_game_does_not_retry_fixed_names():
    game = Wizard(3)
    calls = []

    class CountingNames(cli.NameList):
        def __call__(self, seat_index):
            calls.append(seat_index)
            if len(calls) > 50:
                raise AssertionError(f"asked {len(calls)} times for seat {seat_index}")
            return super().__call__(seat_index)

    with pytest.raises(InvalidInputError):
        cli.run_game(game, CountingNames(["", "B", "C"]), lambda *_: 0)
    assert calls == [0]

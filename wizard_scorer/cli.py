# wizard_scorer/cli.py
from __future__ import annotations

import argparse
import logging
import os
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from dotenv import load_dotenv

from .agents import (
    ConsoleInputSource,
    ConsoleNameSource,
    InputSource,
    NameSource,
    RandomScoreAgent,
    SeatNames,
)
from .engine import Wizard
from .rounds import Round
from .scoreboard import plot_totals, score_table, standings
from .state import InvalidInputError, Player, RoundState, WizardState
from .verbose_logger import VerboseGameLogger

logger = logging.getLogger(__name__)

# Load environment variables from a .env file if present.
load_dotenv()

# Player count limits of the physical game.
MIN_PLAYERS = 3
MAX_PLAYERS = 6
DEFAULT_PLAYERS = 4


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Keep score of a game of Wizard: enter every player's bid and "
            "tricks won, round by round."
        )
    )

    parser.add_argument(
        "--players",
        type=int,
        default=_env_int("WIZARD_PLAYERS", DEFAULT_PLAYERS),
        help=(
            "Number of players, between 3 and 6 "
            "(default: $WIZARD_PLAYERS or %(default)s)."
        ),
    )
    parser.add_argument(
        "--names",
        nargs="+",
        default=None,
        help="Player names in seating order. Prompted for if omitted.",
    )
    parser.add_argument(
        "--auto",
        action="store_true",
        help="Let random agents bid and report tricks instead of prompting.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for --auto games (default: 0).",
    )
    parser.add_argument(
        "--game-id",
        type=str,
        default=None,
        help="Optional label used in log messages and the transcript.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.getenv("WIZARD_LOG_LEVEL", "INFO"),
        help="Logging level (DEBUG, INFO, WARNING, ...). Default: INFO.",
    )
    parser.add_argument(
        "--verbose-log",
        type=str,
        default=None,
        help="Optional path for a turn-by-turn transcript of the game.",
    )
    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Optional image path for a chart of the running totals.",
    )

    return parser.parse_args(argv)


@dataclass
class NameList(NameSource):
    """Name source backed by names given up front."""

    names: Sequence[str]

    def __call__(self, seat_index: int) -> str:
        return self.names[seat_index]


RoundCallback = Callable[[Wizard, Round], None]


def _scored_round(game: Wizard) -> Optional[Round]:
    """The round that has just been scored, if the last step scored one."""
    if game.has_active_round and game.active_round.is_finished:
        return game.active_round
    if game.is_finished and game.history:
        return game.history[-1]
    return None


def run_game(
    game: Wizard,
    name_source: NameSource,
    input_source: InputSource,
    *,
    verbose_logger: Optional[VerboseGameLogger] = None,
    on_round_end: Optional[RoundCallback] = None,
) -> Wizard:
    """
    Step `game` until it ends.

    Rejected player names are logged and asked for again, unless the names
    were given up front (NameList), which would repeat the same answer. Every
    other error propagates. `on_round_end` is called once per round, right
    after scoring.
    """
    pending: List[Tuple[Player, RoundState, int]] = []

    def recording_input(current_player: Player, phase: RoundState) -> int:
        value = input_source(current_player, phase)
        pending.append((current_player, phase, value))
        return value

    last_reported = 0
    while not game.is_finished:
        current_round = game.active_round if game.has_active_round else None
        try:
            game.step(name_source, recording_input)
        except InvalidInputError as exc:
            if game.state is not WizardState.INIT or isinstance(name_source, NameList):
                raise
            logger.warning("%s", exc)
            continue

        if verbose_logger is not None and current_round is not None:
            for player, phase, value in pending:
                verbose_logger.log_turn(
                    game_id=game.game_label,
                    round_number=current_round.round_number,
                    phase=phase,
                    player_name=player.name,
                    value=value,
                    next_phase=current_round.state,
                )
        pending.clear()

        scored = _scored_round(game)
        if scored is not None and scored.round_number > last_reported:
            last_reported = scored.round_number
            if verbose_logger is not None:
                verbose_logger.log_round(game_id=game.game_label, round_=scored)
            if on_round_end is not None:
                on_round_end(game, scored)

    return game


def _print_round(game: Wizard, scored: Round) -> None:
    history = list(game.history)
    if scored not in history:
        history.append(scored)
    print()
    print(f"Round {scored.round_number}/{game.round_budget}")
    print(score_table(history).to_string())
    print()


def play(args: argparse.Namespace) -> Wizard:
    """Run one game as configured by `args` and return the finished session."""
    num_players = args.players
    if num_players < MIN_PLAYERS or num_players > MAX_PLAYERS:
        raise SystemExit(
            f"Wizard requires between {MIN_PLAYERS} and {MAX_PLAYERS} players; "
            f"got {num_players}."
        )
    if args.names is not None and len(args.names) != num_players:
        raise SystemExit(
            f"Got {len(args.names)} names for {num_players} players."
        )
    if args.names is not None and len(set(args.names)) != len(args.names):
        raise SystemExit("Player names must be unique.")
    if args.names is not None and any(not name.strip() for name in args.names):
        raise SystemExit("Player names must not be empty.")

    game = Wizard(num_players, game_label=args.game_id)
    logger.info(
        "Starting a %d player game over %d rounds", num_players, game.round_budget
    )

    name_source: NameSource
    input_source: InputSource
    if args.names is not None:
        name_source = NameList(args.names)
    elif args.auto:
        name_source = SeatNames()
    else:
        name_source = ConsoleNameSource()

    if args.auto:
        input_source = RandomScoreAgent(rng=random.Random(args.seed), game=game)
    else:
        input_source = ConsoleInputSource()

    verbose_logger = (
        VerboseGameLogger(args.verbose_log)
        if args.verbose_log
        else None
    )

    try:
        run_game(
            game,
            name_source,
            input_source,
            verbose_logger=verbose_logger,
            on_round_end=_print_round,
        )
    finally:
        if verbose_logger:
            verbose_logger.flush()

    print("Final standings")
    print(standings(game.players).to_string(index=False))

    if args.plot:
        ax = plot_totals(game.history)
        ax.figure.savefig(args.plot, bbox_inches="tight")
        logger.info("Wrote score chart to %s", args.plot)

    return game


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    play(args)


if __name__ == "__main__":
    main()

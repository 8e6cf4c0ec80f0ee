# wizard_scorer/debug_round.py
from __future__ import annotations

import argparse
import logging
from typing import Iterator, List

from .rounds import Round
from .state import Player


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Step a single Wizard round with scripted bids and trick counts "
            "and print the round after every step."
        )
    )
    parser.add_argument(
        "--names",
        nargs="+",
        default=["Player 1", "Player 2"],
        help="Player names in turn order (default: two players).",
    )
    parser.add_argument(
        "--round-number",
        type=int,
        default=1,
        help="Number of cards dealt this round (default: 1).",
    )
    parser.add_argument(
        "--values",
        nargs="+",
        type=int,
        default=[1, 1, 0, 1],
        help=(
            "Bids followed by trick counts, one per turn "
            "(default: 1 1 0 1, i.e. both bid one, the second player wins)."
        ),
    )
    return parser.parse_args(argv)


def run_round(round_: Round, values: Iterator[int]) -> List[str]:
    """Step `round_` to its end and return its printout after every step."""
    frames = [str(round_)]
    while not round_.is_finished:
        if round_.awaiting_input:
            value = next(values, None)
            if value is None:
                raise SystemExit(
                    f"Ran out of values in state {round_.state.name}"
                )
            round_.step(value)
        else:
            round_.step()
        frames.append(str(round_))
    return frames


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        round_ = Round(args.round_number, [Player(name) for name in args.names])
    except ValueError as exc:
        raise SystemExit(str(exc))
    for frame in run_round(round_, iter(args.values)):
        print(frame)
        print()


if __name__ == "__main__":
    main()

'''
python3 -m wizard_scorer.debug_round \
  --names Ann Bob Cid \
  --round-number 2 \
  --values 1 0 0 1 0 1
'''

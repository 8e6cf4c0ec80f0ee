# wizard_scorer/verbose_logger.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .rounds import Round
from .state import RoundState


class VerboseGameLogger:
    """Accumulates a turn-by-turn transcript of a Wizard game."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._entries: List[str] = []

    def log_turn(
        self,
        *,
        game_id: Optional[str],
        round_number: int,
        phase: RoundState,
        player_name: str,
        value: int,
        next_phase: RoundState,
    ) -> None:
        header_parts = []
        if game_id is not None:
            header_parts.append(f"Game: {game_id}")
        header_parts.extend(
            [
                f"Round: {round_number}",
                f"Phase: {phase.name}",
            ]
        )
        entry = f"{' | '.join(header_parts)} | {player_name} -> {value}"
        if next_phase is not phase:
            entry += f" => {next_phase.name}"
        self._entries.append(entry)

    def log_round(self, *, game_id: Optional[str], round_: Round) -> None:
        deltas = round_.score_deltas
        lines = [
            f"=== Round {round_.round_number}"
            + (f" | Game: {game_id}" if game_id is not None else "")
            + " ===",
        ]
        if round_.retip_count or round_.replay_count:
            lines.append(
                f"Retips: {round_.retip_count} | Replays: {round_.replay_count}"
            )
        for p in round_.players:
            lines.append(f"{p} ({deltas.get(p.name, 0):+d})")
        self._entries.append("\n".join(lines))

    def flush(self) -> None:
        if not self._entries:
            return
        to_write = "\n".join(self._entries)
        self._entries.clear()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(to_write + "\n", encoding="utf-8")

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple

from .move import MoveRecord
from .piece import ALL_PIECES, BLACK_PIECES, WHITE_PIECES, Color, PieceId


class PieceScore:
    """Captured material per starting piece, over all 32 identities."""

    def __init__(self) -> None:
        self._scores: Dict[PieceId, int] = {pid: 0 for pid in ALL_PIECES}

    def add(self, identity: PieceId, points: int) -> None:
        if identity not in self._scores:
            raise KeyError(identity)
        self._scores[identity] += points

    def __getitem__(self, identity: PieceId) -> int:
        return self._scores[identity]

    def get(self, identity: PieceId, default: int = 0) -> int:
        return self._scores.get(identity, default)

    def __iter__(self) -> Iterator[PieceId]:
        return iter(ALL_PIECES)

    def __len__(self) -> int:
        return len(self._scores)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PieceScore):
            return NotImplemented
        return self._scores == other._scores

    def items(self) -> List[Tuple[PieceId, int]]:
        return [(pid, self._scores[pid]) for pid in ALL_PIECES]

    def for_color(self, color: Color) -> List[Tuple[PieceId, int]]:
        roster = WHITE_PIECES if color == Color.WHITE else BLACK_PIECES
        return [(pid, self._scores[pid]) for pid in roster]

    def total(self, color: Color) -> int:
        return sum(points for _, points in self.for_color(color))

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {
            str(color): {pid.name: points for pid, points in self.for_color(color)}
            for color in (Color.WHITE, Color.BLACK)
        }

    def format(self) -> str:
        lines: List[str] = []
        for color in (Color.WHITE, Color.BLACK):
            if lines:
                lines.append("")
            lines.append(f"{str(color).capitalize()}:")
            lines.extend(f"\t{pid.name} - {points}" for pid, points in self.for_color(color))
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"PieceScore({self.to_dict()!r})"


def score_records(records: Iterable[MoveRecord]) -> PieceScore:
    """Credit each capture to the identity of the capturing piece."""
    score = PieceScore()
    for rec in records:
        score.add(rec.mover, rec.capture_score)
    return score


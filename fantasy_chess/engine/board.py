from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from .errors import EnPassantPieceNotFound, PieceNotFound
from .move import MoveRecord, Ply
from .piece import STARTING_LAYOUT, Color, Piece, PieceId, PieceKind
from .square import Square


logger = logging.getLogger(__name__)


PIECE_TO_CHAR = {
    PieceKind.PAWN: "p",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}

# King move -> implied rook move
CASTLES: Dict[Tuple[Square, Square], Tuple[Square, Square]] = {
    (Square.E1, Square.G1): (Square.H1, Square.F1),
    (Square.E1, Square.C1): (Square.A1, Square.D1),
    (Square.E8, Square.G8): (Square.H8, Square.F8),
    (Square.E8, Square.C8): (Square.A8, Square.D8),
}


@dataclass(frozen=True)
class LastMove:
    identity: PieceId
    origin: Square
    destination: Square


def _en_passant_moves() -> Dict[Tuple[Square, Square], Tuple[PieceKind, str, Square, Square]]:
    """Build (capture origin, capture destination) -> expected previous ply.

    The expected previous ply is the double step of the pawn being passed:
    (kind, starting file, origin, destination).
    """
    table: Dict[Tuple[Square, Square], Tuple[PieceKind, str, Square, Square]] = {}
    # White captures from the 5th rank upward, black from the 4th rank downward
    for rank, dr in ((4, 1), (3, -1)):
        for file in range(8):
            origin = Square(rank * 8 + file)
            for df in (-1, 1):
                dest = origin.offset(df, dr)
                if dest is None:
                    continue
                passed_to = origin.offset(df, 0)
                passed_from = origin.offset(df, 2 * dr)
                assert passed_to is not None and passed_from is not None
                key = (origin, dest)
                if key in table:
                    raise RuntimeError(f"duplicate en passant pattern {key}")
                table[key] = (PieceKind.PAWN, passed_to.file_name, passed_from, passed_to)
    return table


EN_PASSANT_MOVES = _en_passant_moves()


@dataclass(frozen=True)
class Resolution:
    """Board mutation for one ply, computed before anything is changed."""

    kind: str
    vacate: Tuple[Square, ...]
    place: Tuple[Tuple[Square, Piece], ...]
    captured: Optional[Piece] = None


def _resolve_promotion(
    pieces: Mapping[Square, Piece],
    mover: Piece,
    origin: Square,
    destination: Square,
    promotion: PieceKind,
) -> Resolution:
    return Resolution(
        kind="promotion",
        vacate=(origin,),
        place=((destination, mover.promote(promotion)),),
        captured=pieces.get(destination),
    )


def _matches_last_move(
    expected: Tuple[PieceKind, str, Square, Square], last_move: LastMove
) -> bool:
    kind, file, origin, destination = expected
    return (
        last_move.identity.kind == kind
        and last_move.identity.file == file
        and last_move.origin == origin
        and last_move.destination == destination
    )


def _resolve_en_passant(
    pieces: Mapping[Square, Piece],
    mover: Piece,
    origin: Square,
    destination: Square,
    last_move: Optional[LastMove],
) -> Optional[Resolution]:
    if mover.current_kind != PieceKind.PAWN or last_move is None or destination in pieces:
        return None
    expected = EN_PASSANT_MOVES.get((origin, destination))
    if expected is None or not _matches_last_move(expected, last_move):
        return None
    passed = last_move.destination
    captured = pieces.get(passed)
    if captured is None:
        raise EnPassantPieceNotFound(passed)
    return Resolution(
        kind="en_passant",
        vacate=(origin, passed),
        place=((destination, mover),),
        captured=captured,
    )


def _resolve_castle(
    pieces: Mapping[Square, Piece],
    mover: Piece,
    origin: Square,
    destination: Square,
) -> Optional[Resolution]:
    if mover.current_kind != PieceKind.KING:
        return None
    rook_move = CASTLES.get((origin, destination))
    if rook_move is None:
        return None
    rook_from, rook_to = rook_move
    rook = pieces.get(rook_from)
    if rook is None:
        raise PieceNotFound(rook_from)
    return Resolution(
        kind="castle",
        vacate=(origin, rook_from),
        place=((destination, mover), (rook_to, rook)),
        captured=pieces.get(destination),
    )


def _resolve_move(
    pieces: Mapping[Square, Piece],
    mover: Piece,
    origin: Square,
    destination: Square,
) -> Resolution:
    return Resolution(
        kind="move",
        vacate=(origin,),
        place=((destination, mover),),
        captured=pieces.get(destination),
    )


@dataclass
class Board:
    """Piece occupancy for replaying a game.

    Notes:
    - Occupancy is sparse: captured pieces are removed, never marked.
    - Moves are trusted, not validated; only the special cases that move or
      remove a second piece (castling, en passant) and promotion are detected.
    - A ply that fails leaves the board untouched.
    """

    pieces: Dict[Square, Piece]
    last_move: Optional[LastMove] = None
    # plies applied so far
    move_num: int = 0

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board in the standard chess starting position."""
        return cls(pieces={sq: Piece(pid) for sq, pid in STARTING_LAYOUT.items()})

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.pieces.get(square)

    def occupancy(self) -> int:
        return len(self.pieces)

    def apply(self, ply: Ply) -> MoveRecord:
        return self.apply_ply(ply.origin, ply.destination, ply.promotion)

    def apply_ply(
        self,
        origin: Square,
        destination: Square,
        promotion: Optional[PieceKind] = None,
    ) -> MoveRecord:
        """Apply one ply in place and describe what happened.

        Special cases are tried in order: promotion, en passant, castling,
        then a plain move.

        Args:
            origin (Square): Square of the moving piece.
            destination (Square): Landing square (already resolved for
                promotions).
            promotion (Optional[PieceKind]): Promoted kind, if any.

        Returns:
            MoveRecord: Mover, squares, and captured piece with its value.

        Raises:
            PieceNotFound: If ``origin`` or a castling rook square is empty.
            EnPassantPieceNotFound: If the pawn to capture en passant is gone.
        """
        mover = self.pieces.get(origin)
        if mover is None:
            raise PieceNotFound(origin)

        res: Resolution
        if promotion is not None:
            res = _resolve_promotion(self.pieces, mover, origin, destination, promotion)
        else:
            res = (
                _resolve_en_passant(self.pieces, mover, origin, destination, self.last_move)
                or _resolve_castle(self.pieces, mover, origin, destination)
                or _resolve_move(self.pieces, mover, origin, destination)
            )
        if res.kind != "move":
            logger.debug("%s: %s %s%s", res.kind, mover.identity, origin, destination)

        for sq in res.vacate:
            self.pieces.pop(sq, None)
        for sq, piece in res.place:
            self.pieces[sq] = piece

        self.last_move = LastMove(mover.identity, origin, destination)
        self.move_num += 1
        captured = res.captured
        return MoveRecord(
            move_num=self.move_num,
            mover=mover.identity,
            origin=origin,
            destination=destination,
            captured=captured.identity if captured is not None else None,
            capture_score=captured.value if captured is not None else 0,
            promotion=promotion,
        )

    def placement(self) -> str:
        """Serialize occupancy as the piece-placement field of a FEN string.

        Promoted pieces are shown as their promoted kind.
        """
        ranks: List[str] = []
        for rank_idx in range(7, -1, -1):
            run = 0
            row = []
            for file_idx in range(8):
                piece = self.pieces.get(Square(rank_idx * 8 + file_idx))
                if piece is None:
                    run += 1
                    continue
                if run > 0:
                    row.append(str(run))
                    run = 0
                ch = PIECE_TO_CHAR[piece.current_kind]
                row.append(ch.upper() if piece.color == Color.WHITE else ch)
            if run > 0:
                row.append(str(run))
            ranks.append("".join(row))
        return "/".join(ranks)

"""
Turn a PartialMove into exactly one legal move on a given board.

Candidates are every piece of the named type belonging to the side to move
(narrowed by any file or rank the player wrote). Each candidate is checked
for legality; the move resolves only if exactly one candidate survives.
"""
import logging
from dataclasses import dataclass

import chess

from chessbot.errors import AmbiguousMove, IllegalMove, NoPieceOfType
from chessbot.notation import Castle, PartialMove
from chessbot.oracle import BoardOracle

logger = logging.getLogger(__name__)

CASTLING_SQUARES = {
    (chess.WHITE, Castle.KINGSIDE): ("e1", "g1"),
    (chess.WHITE, Castle.QUEENSIDE): ("e1", "c1"),
    (chess.BLACK, Castle.KINGSIDE): ("e8", "g8"),
    (chess.BLACK, Castle.QUEENSIDE): ("e8", "c8"),
}


@dataclass(frozen=True)
class ResolvedMove:
    piece_type: chess.PieceType
    origin: str
    destination: str
    promotion: chess.PieceType | None = None

    def uci(self) -> str:
        promo = chess.piece_symbol(self.promotion) if self.promotion else ""
        return f"{self.origin}{self.destination}{promo}"


def candidate_origins(partial: PartialMove, oracle: BoardOracle, side_to_move: chess.Color) -> list[str]:
    squares = oracle.pieces_of(partial.piece_type, side_to_move)
    if partial.origin_file:
        squares = {sq for sq in squares if sq[0] == partial.origin_file}
    if partial.origin_rank:
        squares = {sq for sq in squares if sq[1] == partial.origin_rank}
    return sorted(squares)


def resolve(partial: PartialMove, oracle: BoardOracle, side_to_move: chess.Color) -> ResolvedMove:
    if partial.castle is not None:
        origin, destination = CASTLING_SQUARES[(side_to_move, partial.castle)]
        if not oracle.is_legal(origin, destination):
            raise IllegalMove()
        return ResolvedMove(chess.KING, origin, destination)

    candidates = candidate_origins(partial, oracle, side_to_move)
    if not candidates:
        raise NoPieceOfType()

    legal = [
        origin
        for origin in candidates
        if oracle.is_legal(origin, partial.destination, partial.promotion)
    ]
    logger.debug(
        "resolving %s -> %s: candidates=%s legal=%s",
        chess.piece_name(partial.piece_type), partial.destination, candidates, legal,
    )

    if not legal:
        raise IllegalMove()
    if len(legal) > 1:
        raise AmbiguousMove()

    return ResolvedMove(partial.piece_type, legal[0], partial.destination, partial.promotion)

"""
Short algebraic notation parser.

Turns a move string such as ``Nf3``, ``exd5``, ``e8=Q`` or ``O-O`` into a
:class:`PartialMove`. Nothing here looks at a board: which piece actually
moves is decided later by :mod:`chessbot.resolver`.
"""
import re
from dataclasses import dataclass
from enum import Enum

import chess

from chessbot.errors import MalformedMove, MissingPromotion

PIECE_LETTERS = {
    "N": chess.KNIGHT,
    "B": chess.BISHOP,
    "R": chess.ROOK,
    "Q": chess.QUEEN,
    "K": chess.KING,
}
PROMOTION_LETTERS = {
    "Q": chess.QUEEN,
    "R": chess.ROOK,
    "N": chess.KNIGHT,
    "B": chess.BISHOP,
}

# The origin may be written before the piece letter ("h1Rd1") or, as in
# standard SAN, right after it ("Rhd1"). Never both.
MOVE_RE = re.compile(
    r"(?P<pre>[a-h]?[1-8]?)"
    r"(?P<piece>[NKQBR]?)"
    r"(?P<post>[a-h]?[1-8]?)"
    r"x?"
    r"(?P<dest>[a-h][1-8])"
    r"(?:=(?P<promo>[QRNB]))?"
    r"[+#]?"
)


class Castle(Enum):
    KINGSIDE = "O-O"
    QUEENSIDE = "O-O-O"


@dataclass(frozen=True)
class PartialMove:
    piece_type: chess.PieceType
    destination: str | None = None
    origin_file: str | None = None
    origin_rank: str | None = None
    promotion: chess.PieceType | None = None
    castle: Castle | None = None

    @property
    def origin_square(self) -> str | None:
        """The full origin square, when both file and rank were given."""
        if self.origin_file and self.origin_rank:
            return self.origin_file + self.origin_rank
        return None

    @property
    def is_castle(self) -> bool:
        return self.castle is not None


def _split_origin(origin: str) -> tuple[str | None, str | None]:
    file = origin[0] if origin[:1].isalpha() else None
    rank = origin[-1] if origin[-1:].isdigit() else None
    return file, rank


def parse(text: str) -> PartialMove:
    """
    Parse a move string.

    Raises MalformedMove when the string is not recognised and
    MissingPromotion when a pawn reaches the back rank without ``=X``.
    """
    for castle in Castle:
        if text == castle.value:
            return PartialMove(piece_type=chess.KING, castle=castle)

    match = MOVE_RE.fullmatch(text)
    if match is None:
        raise MalformedMove()

    pre, post = match.group("pre"), match.group("post")
    if pre and post:
        raise MalformedMove()

    letter = match.group("piece")
    piece_type = PIECE_LETTERS[letter] if letter else chess.PAWN
    destination = match.group("dest")
    origin_file, origin_rank = _split_origin(pre or post)

    promo = match.group("promo")
    promotion = PROMOTION_LETTERS[promo] if promo else None
    reaches_back_rank = destination[1] in ("1", "8")

    if piece_type == chess.PAWN and reaches_back_rank:
        if promotion is None:
            raise MissingPromotion()
    elif promotion is not None:
        raise MalformedMove("Only a pawn reaching the last rank can promote.")

    return PartialMove(
        piece_type=piece_type,
        destination=destination,
        origin_file=origin_file,
        origin_rank=origin_rank,
        promotion=promotion,
    )

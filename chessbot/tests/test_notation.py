import chess
import pytest

from chessbot.errors import MalformedMove, MissingPromotion
from chessbot.notation import Castle, parse


def test_pawn_push_has_no_origin():
    move = parse("e4")
    assert move.piece_type == chess.PAWN
    assert move.destination == "e4"
    assert move.origin_square is None
    assert move.origin_file is None and move.origin_rank is None
    assert move.promotion is None
    assert not move.is_castle


def test_piece_letter_and_capture():
    move = parse("Nxf3+")
    assert move.piece_type == chess.KNIGHT
    assert move.destination == "f3"


@pytest.mark.parametrize("text, file, rank", [
    ("Rhd1", "h", None),
    ("R1d1", None, "1"),
    ("Rh1d1", "h", "1"),
    ("h1Rd1", "h", "1"),
    ("hRd1", "h", None),
    ("exd5", "e", None),
])
def test_origin_disambiguators(text, file, rank):
    move = parse(text)
    assert move.origin_file == file
    assert move.origin_rank == rank


def test_full_origin_square():
    move = parse("e2e4")
    assert move.piece_type == chess.PAWN
    assert move.origin_square == "e2"
    assert move.destination == "e4"


def test_promotion_suffix():
    move = parse("e8=Q")
    assert move.piece_type == chess.PAWN
    assert move.destination == "e8"
    assert move.promotion == chess.QUEEN

    assert parse("dxc1=N#").promotion == chess.KNIGHT


def test_back_rank_pawn_needs_promotion():
    with pytest.raises(MissingPromotion):
        parse("e8")
    with pytest.raises(MissingPromotion):
        parse("bxa1")


def test_castling_literals():
    assert parse("O-O").castle is Castle.KINGSIDE
    assert parse("O-O-O").castle is Castle.QUEENSIDE
    assert parse("O-O").piece_type == chess.KING
    assert parse("O-O").destination is None


@pytest.mark.parametrize("text", [
    "",
    "hello",
    "nf3",      # piece letters are uppercase
    "E4",       # files are lowercase
    "e9",
    "e8Q=",     # promotion must follow the destination
    "e8=K",
    "Nf8=Q",    # only pawns promote
    "e7=Q",     # and only on the last rank
    "0-0",
    "O-O-O-O",
    " e4",
    "e4 ",
    "a1b2c3",
])
def test_malformed_strings(text):
    with pytest.raises(MalformedMove):
        parse(text)

import threading

import chess
import pytest

from chessbot.errors import AlreadyInGame, InvalidOpponent


def test_start_session_assigns_colors(registry):
    registry.start_session("alice", "bob", chess.BLACK)
    session = registry.checkout("alice")
    assert session.white == "bob"
    assert session.black == "alice"
    assert session.side_to_move == chess.WHITE


def test_participant_can_only_be_in_one_game(registry):
    registry.start_session("alice", "bob")
    with pytest.raises(AlreadyInGame):
        registry.start_session("alice", "carol")
    with pytest.raises(AlreadyInGame):
        registry.start_session("carol", "bob")

    assert "carol" not in registry
    assert len(registry) == 1
    with registry.borrow("alice") as session:
        assert session.participants == ("alice", "bob")
        assert len(session.oracle.board.move_stack) == 0


def test_cannot_play_yourself(registry):
    with pytest.raises(InvalidOpponent):
        registry.start_session("alice", "alice")
    assert len(registry) == 0


def test_checkout_removes_session_for_both_players(registry):
    registry.start_session("alice", "bob")
    session = registry.checkout("bob")
    assert session is not None
    assert registry.checkout("alice") is None
    assert registry.checkout("bob") is None

    # still counts as in a game while checked out
    with pytest.raises(AlreadyInGame):
        registry.start_session("alice", "carol")

    registry.checkin(session)
    assert registry.checkout("alice") is session


def test_concluded_session_is_discarded_on_checkin(registry):
    registry.start_session("alice", "bob")
    with registry.borrow("alice") as session:
        session.resign("alice")
    assert registry.checkout("alice") is None
    assert registry.checkout("bob") is None
    assert len(registry) == 0
    # both players are free again
    registry.start_session("bob", "carol")


def test_borrow_checks_in_on_error(registry):
    registry.start_session("alice", "bob")
    with pytest.raises(RuntimeError):
        with registry.borrow("alice") as session:
            raise RuntimeError("boom")
    assert registry.checkout("alice") is session


def test_borrow_without_game_yields_none(registry):
    with registry.borrow("nobody") as session:
        assert session is None


def test_concurrent_checkouts_serialize(registry):
    registry.start_session("alice", "bob")
    checked_out = threading.Event()
    release = threading.Event()
    seen = []

    def first():
        with registry.borrow("alice") as session:
            seen.append(session)
            checked_out.set()
            release.wait(timeout=5)

    worker = threading.Thread(target=first)
    worker.start()
    assert checked_out.wait(timeout=5)

    assert registry.checkout("bob") is None

    release.set()
    worker.join(timeout=5)
    assert registry.checkout("bob") is seen[0]

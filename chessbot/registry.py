"""
Process-wide set of live games, indexed by both participants.

A session is mutated only while it is checked out: `checkout` removes it
from the registry, so a second command for the same game sees no session
until the first one checks it back in (or drops it because the game ended).
"""
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

import chess

from chessbot.errors import AlreadyInGame, InvalidOpponent
from chessbot.game_state import GameSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, GameSession] = {}
        # participants whose session is currently checked out
        self._busy: set[str] = set()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions) // 2 + len(self._busy) // 2

    def __contains__(self, participant: str) -> bool:
        return self.in_game(participant)

    def in_game(self, participant: str) -> bool:
        with self._lock:
            return participant in self._sessions or participant in self._busy

    def start_session(self, requester: str, opponent: str, preferred_color: chess.Color = chess.WHITE) -> None:
        """Create a game, with `requester` playing `preferred_color`."""
        if requester == opponent:
            raise InvalidOpponent()
        with self._lock:
            if requester in self._sessions or requester in self._busy:
                raise AlreadyInGame()
            if opponent in self._sessions or opponent in self._busy:
                raise AlreadyInGame("That user is already in a game.")
            if preferred_color == chess.WHITE:
                session = GameSession(white=requester, black=opponent)
            else:
                session = GameSession(white=opponent, black=requester)
            for participant in session.participants:
                self._sessions[participant] = session
        logger.info("started game: %s (white) vs %s (black)", session.white, session.black)

    def checkout(self, participant: str) -> GameSession | None:
        """Remove and return the session `participant` plays in, if any."""
        with self._lock:
            session = self._sessions.get(participant)
            if session is None:
                return None
            for player in session.participants:
                del self._sessions[player]
                self._busy.add(player)
            return session

    def checkin(self, session: GameSession) -> None:
        """Put a checked-out session back, or drop it if the game is over."""
        with self._lock:
            for player in session.participants:
                self._busy.discard(player)
            if session.concluded:
                logger.info("discarding finished game %s vs %s", session.white, session.black)
                return
            for player in session.participants:
                self._sessions[player] = session

    @contextmanager
    def borrow(self, participant: str) -> Iterator[GameSession | None]:
        """Check a session out for the duration of a `with` block."""
        session = self.checkout(participant)
        try:
            yield session
        finally:
            if session is not None:
                self.checkin(session)

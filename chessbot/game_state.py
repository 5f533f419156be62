import logging
from dataclasses import dataclass
from enum import Enum

import chess

from chessbot import notation
from chessbot.errors import WrongTurn
from chessbot.oracle import BoardOracle
from chessbot.resolver import ResolvedMove, resolve

logger = logging.getLogger(__name__)


class Conclusion(Enum):
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW_AGREED = "draw_agreed"
    RESIGNATION = "resignation"


@dataclass(frozen=True)
class Outcome:
    conclusion: Conclusion
    winner: str | None = None


class DrawResult(Enum):
    OFFERED = "offered"
    ACCEPTED = "accepted"
    REDUNDANT = "redundant"


@dataclass(frozen=True)
class MoveResult:
    move: ResolvedMove
    san: str
    outcome: Outcome | None = None


def color_name(color: chess.Color) -> str:
    return "white" if color == chess.WHITE else "black"


# One game between two participants: owns the board, turn and draw offer
class GameSession:
    def __init__(self, white: str, black: str, oracle: BoardOracle | None = None) -> None:
        if white == black:
            raise ValueError("a game needs two distinct participants")
        self.white = white
        self.black = black
        self.oracle = oracle or BoardOracle()
        self.side_to_move: chess.Color = self.oracle.turn
        self.draw_offer: str | None = None
        self.outcome: Outcome | None = None
        self.last_move: dict | None = None

    def __repr__(self) -> str:
        return f"GameSession(white={self.white!r}, black={self.black!r}, state={self.state!r})"

    @property
    def participants(self) -> tuple[str, str]:
        return self.white, self.black

    @property
    def concluded(self) -> bool:
        return self.outcome is not None

    @property
    def state(self) -> str:
        if self.outcome is not None:
            return "concluded"
        if self.draw_offer is not None:
            return "draw_offered"
        return "active"

    @property
    def participant_to_move(self) -> str:
        return self.white if self.side_to_move == chess.WHITE else self.black

    def color_of(self, participant: str) -> chess.Color:
        if participant == self.white:
            return chess.WHITE
        if participant == self.black:
            return chess.BLACK
        raise ValueError(f"{participant!r} is not playing in this game")

    def opponent_of(self, participant: str) -> str:
        return self.black if self.color_of(participant) == chess.WHITE else self.white

    def _require_active(self) -> None:
        if self.concluded:
            raise RuntimeError("game is already over")

    def attempt_move(self, mover: str, move_string: str) -> MoveResult:
        """
        Parse, resolve and play `move_string` for `mover`.

        Any ChessBotError raised here leaves the session exactly as it was:
        nothing is mutated until the move has resolved to one legal move.
        """
        self._require_active()
        if self.color_of(mover) != self.side_to_move:
            raise WrongTurn()

        partial = notation.parse(move_string)
        move = resolve(partial, self.oracle, self.side_to_move)

        self.draw_offer = None
        san = self.oracle.apply(move.origin, move.destination, move.promotion)
        self.side_to_move = not self.side_to_move
        self.last_move = {"from": move.origin, "to": move.destination}
        logger.info("%s played %s (%s)", mover, san, move.uci())

        if not self.oracle.has_legal_replies():
            if self.oracle.is_in_check(self.side_to_move):
                self.outcome = Outcome(Conclusion.CHECKMATE, winner=mover)
            else:
                self.outcome = Outcome(Conclusion.STALEMATE)
            logger.info("game %s vs %s ended: %s", self.white, self.black, self.outcome.conclusion.value)

        return MoveResult(move, san, self.outcome)

    def offer_draw(self, by: str) -> DrawResult:
        self._require_active()
        self.color_of(by)
        if self.draw_offer is None:
            self.draw_offer = by
            return DrawResult.OFFERED
        if self.draw_offer == by:
            return DrawResult.REDUNDANT
        self.outcome = Outcome(Conclusion.DRAW_AGREED)
        logger.info("game %s vs %s drawn by agreement", self.white, self.black)
        return DrawResult.ACCEPTED

    def resign(self, by: str) -> Outcome:
        self._require_active()
        self.outcome = Outcome(Conclusion.RESIGNATION, winner=self.opponent_of(by))
        logger.info("%s resigned against %s", by, self.opponent_of(by))
        return self.outcome

    def state_payload(self) -> dict:
        """Return the current game state as a JSON-friendly dict."""
        return {
            "type": "state",
            "fen": self.oracle.fen(),
            "white": self.white,
            "black": self.black,
            "lastMove": self.last_move,
            "turn": color_name(self.side_to_move),
            "drawOffer": self.draw_offer,
            "state": self.state,
            "gameOver": self.concluded,
            "outcome": self.outcome.conclusion.value if self.outcome else None,
            "winner": self.outcome.winner if self.outcome else None,
        }

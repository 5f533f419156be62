"""
Command surface of the bot: `!start`, `!move`, `!draw`, `!resign` and friends.

`CommandHandler.handle` takes one incoming chat message and returns the
replies to deliver. It never does I/O while a game is checked out; boards
are copied inside the checkout and rendered afterwards.
"""
import logging
from dataclasses import dataclass

import chess

from chessbot.config import Settings
from chessbot.errors import ChessBotError, InvalidOpponent, MalformedMove, NoActiveGame
from chessbot.game_state import Conclusion, DrawResult, Outcome
from chessbot.registry import SessionRegistry
from chessbot.render import image_name, render_board

logger = logging.getLogger(__name__)

ABOUT_TEXT = "Lets you play chess in an inconvenient way."


@dataclass(frozen=True)
class Reply:
    recipients: tuple[str, ...]
    text: str
    board: str | None = None


def outcome_text(outcome: Outcome) -> str:
    if outcome.conclusion == Conclusion.CHECKMATE:
        return f"Checkmate! {outcome.winner} wins. Game over!"
    if outcome.conclusion == Conclusion.STALEMATE:
        return "Stalemate. Game over!"
    if outcome.conclusion == Conclusion.DRAW_AGREED:
        return "Draw accepted. Game over!"
    return f"{outcome.winner} wins by resignation."


class CommandHandler:
    def __init__(self, registry: SessionRegistry, settings: Settings | None = None) -> None:
        self.registry = registry
        self.settings = settings or Settings()
        self._commands = {
            "start": self.start,
            "move": self.move,
            "draw": self.draw,
            "resign": self.resign,
            "quit": self.resign,
            "board": self.board,
            "about": self.about,
            "ping": self.ping,
        }

    def help_text(self) -> str:
        p = self.settings.prefix
        return (
            f"Commands: `{p}start @user [as black]`, `{p}move <move>`, "
            f"`{p}draw`, `{p}resign`, `{p}board`, `{p}about`, `{p}ping`."
        )

    def handle(self, sender: str, content: str, mentions: list[str] | tuple[str, ...] = ()) -> list[Reply]:
        prefix = self.settings.prefix
        if not content.startswith(prefix):
            return []

        name, _, args = content[len(prefix):].partition(" ")
        command = self._commands.get(name.lower())
        if command is None:
            return [Reply((sender,), self.help_text())]

        try:
            return command(sender, args.strip(), list(mentions))
        except ChessBotError as exc:
            logger.debug("rejected %r from %s: %s", content, sender, exc)
            return [Reply((sender,), exc.reply)]

    def _render(self, board: chess.Board, white: str, black: str) -> str:
        out_path = None
        if self.settings.render_dir is not None:
            out_path = self.settings.render_dir / image_name(white, black)
        return render_board(board, size=self.settings.board_size, out_path=out_path)

    # ---- Commands ----
    def start(self, sender: str, args: str, mentions: list[str]) -> list[Reply]:
        opponents = set(mentions)
        if len(opponents) != 1:
            raise InvalidOpponent()
        opponent = opponents.pop()
        if opponent == sender or opponent in self.settings.bots:
            raise InvalidOpponent()

        wants_black = "as black" in args.lower()
        color = chess.BLACK if wants_black else chess.WHITE
        self.registry.start_session(sender, opponent, color)

        white, black = (opponent, sender) if wants_black else (sender, opponent)
        text = f"Game started! {white} plays white, {black} plays black. {white} to move."
        return [Reply((white, black), text)]

    def move(self, sender: str, args: str, mentions: list[str]) -> list[Reply]:
        if not args:
            raise MalformedMove()

        with self.registry.borrow(sender) as session:
            if session is None:
                raise NoActiveGame()
            result = session.attempt_move(sender, args)
            snapshot = session.oracle.board.copy()
            white, black = session.participants
            opponent = session.opponent_of(sender)

        board = self._render(snapshot, white, black)
        if result.outcome is not None:
            text = f"{sender} played {result.san}. {outcome_text(result.outcome)}"
        else:
            text = f"{sender} played {result.san}. {opponent}, it's your turn."
        return [Reply((white, black), text, board)]

    def draw(self, sender: str, args: str, mentions: list[str]) -> list[Reply]:
        with self.registry.borrow(sender) as session:
            if session is None:
                raise NoActiveGame()
            result = session.offer_draw(sender)
            players = session.participants
            outcome = session.outcome

        if result == DrawResult.REDUNDANT:
            return [Reply((sender,), "You've already offered a draw.")]
        if result == DrawResult.ACCEPTED:
            return [Reply(players, outcome_text(outcome))]
        return [Reply(
            players,
            f"{sender} has offered a draw. Use `{self.settings.prefix}draw` to accept, or you may keep playing.",
        )]

    def resign(self, sender: str, args: str, mentions: list[str]) -> list[Reply]:
        with self.registry.borrow(sender) as session:
            if session is None:
                raise NoActiveGame()
            outcome = session.resign(sender)
            players = session.participants
        return [Reply(players, f"{sender} resigned. {outcome_text(outcome)}")]

    def board(self, sender: str, args: str, mentions: list[str]) -> list[Reply]:
        with self.registry.borrow(sender) as session:
            if session is None:
                raise NoActiveGame()
            snapshot = session.oracle.board.copy()
            white, black = session.participants
            to_move = session.participant_to_move
        return [Reply((sender,), f"{to_move} to move.", self._render(snapshot, white, black))]

    def about(self, sender: str, args: str, mentions: list[str]) -> list[Reply]:
        return [Reply((sender,), ABOUT_TEXT)]

    def ping(self, sender: str, args: str, mentions: list[str]) -> list[Reply]:
        return [Reply((sender,), "pong!")]

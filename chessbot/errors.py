class ChessBotError(Exception):
    """Base class for every failure that is reported back to a player."""

    message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    @property
    def reply(self) -> str:
        return str(self)


# ---- Notation ----
class MalformedMove(ChessBotError):
    message = "Unable to parse move string."


class MissingPromotion(ChessBotError):
    message = "Please denote the piece you wish to promote to with an equals sign, e.g. `e8=Q`."


# ---- Resolution ----
class NoPieceOfType(ChessBotError):
    message = "You have no pieces of that type."


class IllegalMove(ChessBotError):
    message = "Given movestring is not a legal move."


class AmbiguousMove(ChessBotError):
    message = (
        "More than one legal move is implied by that notation -- "
        "prepend the destination with the square, file or rank of the piece you want to move, e.g. `Rhd1`."
    )


# ---- Session ----
class WrongTurn(ChessBotError):
    message = "It's not your turn."


class NoActiveGame(ChessBotError):
    message = "I don't see a game you're in. You can start a new one with `!start @user [as black]`."


class AlreadyInGame(ChessBotError):
    message = "You're already in a game with someone else. Use `!resign` before starting a new game."


class InvalidOpponent(ChessBotError):
    message = "Start commands must mention exactly one other user that isn't yourself or a bot."

import chess


# Thin wrapper that owns a python-chess board and answers rule questions
class BoardOracle:
    def __init__(self, fen: str = chess.STARTING_FEN) -> None:
        self.board = chess.Board(fen)

    @property
    def turn(self) -> chess.Color:
        return self.board.turn

    def fen(self) -> str:
        return self.board.fen()

    def piece_on(self, square: str) -> tuple[chess.PieceType, chess.Color] | None:
        piece = self.board.piece_at(chess.parse_square(square))
        if piece is None:
            return None
        return piece.piece_type, piece.color

    def pieces_of(self, piece_type: chess.PieceType, color: chess.Color) -> set[str]:
        """Names of the squares holding `piece_type` pieces of `color`."""
        return {chess.square_name(sq) for sq in self.board.pieces(piece_type, color)}

    def _move(self, origin: str, destination: str, promotion: chess.PieceType | None) -> chess.Move:
        return chess.Move(
            chess.parse_square(origin),
            chess.parse_square(destination),
            promotion=promotion,
        )

    def is_legal(self, origin: str, destination: str, promotion: chess.PieceType | None = None) -> bool:
        return self.board.is_legal(self._move(origin, destination, promotion))

    def apply(self, origin: str, destination: str, promotion: chess.PieceType | None = None) -> str:
        """
        Play a move that has already been confirmed legal.
        Returns the SAN of the move as played.
        """
        move = self._move(origin, destination, promotion)
        if not self.board.is_legal(move):
            raise ValueError(f"illegal move applied to board: {move.uci()}")
        san = self.board.san(move)
        self.board.push(move)
        return san

    def has_legal_replies(self) -> bool:
        return any(True for _ in self.board.legal_moves)

    def is_in_check(self, color: chess.Color) -> bool:
        king = self.board.king(color)
        if king is None:
            return False
        return self.board.is_attacked_by(not color, king)

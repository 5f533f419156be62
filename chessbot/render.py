import logging
import re
from pathlib import Path

import chess
import chess.svg

logger = logging.getLogger(__name__)


def image_name(white: str, black: str) -> str:
    return re.sub(r"[^\w.-]", "_", f"{white}-{black}") + ".svg"


def render_board(board: chess.Board, size: int = 480, out_path: Path | None = None) -> str:
    """
    Draw `board` as SVG from the point of view of the side to move,
    highlighting the last move and a king in check.
    When `out_path` is given the image is also written there.
    """
    lastmove = board.peek() if board.move_stack else None
    check = board.king(board.turn) if board.is_check() else None

    svg = chess.svg.board(
        board,
        orientation=board.turn,
        lastmove=lastmove,
        check=check,
        size=size,
    )

    if out_path is not None:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(svg, encoding="utf-8")
        logger.debug("wrote board image to %s", out_path)

    return svg

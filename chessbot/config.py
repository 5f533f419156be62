"""
Runtime settings, read from the environment (and a local .env file if present).
"""
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _split_list(value: str) -> frozenset[str]:
    return frozenset(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    prefix: str = "!"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    board_size: int = 480
    render_dir: Path | None = None
    bots: frozenset[str] = field(default_factory=frozenset)


def load_settings() -> Settings:
    load_dotenv()
    render_dir = os.getenv("CHESSBOT_RENDER_DIR")
    return Settings(
        prefix=os.getenv("CHESSBOT_PREFIX", "!"),
        host=os.getenv("CHESSBOT_HOST", "127.0.0.1"),
        port=int(os.getenv("CHESSBOT_PORT", "8000")),
        log_level=os.getenv("CHESSBOT_LOG_LEVEL", "INFO").upper(),
        board_size=int(os.getenv("CHESSBOT_BOARD_SIZE", "480")),
        render_dir=Path(render_dir) if render_dir else None,
        bots=_split_list(os.getenv("CHESSBOT_BOTS", "")),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)

import pytest

from chessbot.commands import CommandHandler
from chessbot.config import Settings
from chessbot.registry import SessionRegistry


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def handler(registry):
    return CommandHandler(registry, Settings(bots=frozenset({"chessbot"})))

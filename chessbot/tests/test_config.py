from pathlib import Path

from chessbot.config import Settings, load_settings


def test_defaults(monkeypatch):
    for name in ("CHESSBOT_PREFIX", "CHESSBOT_PORT", "CHESSBOT_RENDER_DIR", "CHESSBOT_BOTS", "CHESSBOT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.prefix == "!"
    assert settings.port == 8000
    assert settings.render_dir is None
    assert settings.bots == frozenset()


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("CHESSBOT_PREFIX", "?")
    monkeypatch.setenv("CHESSBOT_PORT", "9001")
    monkeypatch.setenv("CHESSBOT_LOG_LEVEL", "debug")
    monkeypatch.setenv("CHESSBOT_RENDER_DIR", str(tmp_path))
    monkeypatch.setenv("CHESSBOT_BOTS", "chessbot, helper ,")

    settings = load_settings()
    assert settings == Settings(
        prefix="?",
        port=9001,
        log_level="DEBUG",
        render_dir=Path(tmp_path),
        bots=frozenset({"chessbot", "helper"}),
    )

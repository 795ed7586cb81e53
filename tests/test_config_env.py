from __future__ import annotations

from pathlib import Path

from tickerbar.config import DEFAULT_BASE_URL, load_config


def test_defaults(monkeypatch) -> None:
    for name in (
        "TICKERBAR_REFRESH_SEC",
        "TICKERBAR_ROTATE_SEC",
        "TICKERBAR_MARQUEE_SEC",
        "TICKERBAR_MARQUEE_WIDTH",
        "TICKERBAR_MAX_TICKERS",
        "TICKERBAR_BASE_URL",
        "TICKERBAR_HTTP_TIMEOUT_SEC",
        "TICKERBAR_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    cfg = load_config()

    assert cfg.refresh_sec == 60.0
    assert cfg.rotate_sec == 5.0
    assert cfg.marquee_sec == 0.15
    assert cfg.marquee_width == 40
    assert cfg.max_tickers == 10
    assert cfg.base_url == DEFAULT_BASE_URL
    assert cfg.http_timeout_sec is None
    assert cfg.log_level == "INFO"
    assert "Mozilla/5.0" in cfg.user_agent


def test_env_overrides(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TICKERBAR_REFRESH_SEC", "30")
    monkeypatch.setenv("TICKERBAR_MARQUEE_WIDTH", "24")
    monkeypatch.setenv("TICKERBAR_BASE_URL", "http://localhost:9000/")
    monkeypatch.setenv("TICKERBAR_HTTP_TIMEOUT_SEC", "7.5")
    monkeypatch.setenv("TICKERBAR_SETTINGS_PATH", str(tmp_path / "s.json"))
    monkeypatch.setenv("TICKERBAR_LOG_LEVEL", "debug")

    cfg = load_config()

    assert cfg.refresh_sec == 30.0
    assert cfg.marquee_width == 24
    assert cfg.base_url == "http://localhost:9000"
    assert cfg.http_timeout_sec == 7.5
    assert cfg.settings_path == Path(tmp_path / "s.json")
    assert cfg.log_level == "DEBUG"


def test_blank_or_non_positive_timeout_means_transport_default(monkeypatch) -> None:
    monkeypatch.setenv("TICKERBAR_HTTP_TIMEOUT_SEC", " ")
    assert load_config().http_timeout_sec is None
    monkeypatch.setenv("TICKERBAR_HTTP_TIMEOUT_SEC", "0")
    assert load_config().http_timeout_sec is None

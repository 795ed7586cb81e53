from __future__ import annotations

import json

from tickerbar.settings import MARQUEE_KEY, TICKERS_KEY, JsonSettings


def test_values_survive_reopen(tmp_path) -> None:
    path = tmp_path / "nested" / "settings.json"
    settings = JsonSettings(path)
    settings.set_list(TICKERS_KEY, ["AAPL", "MSFT"])
    settings.set_bool(MARQUEE_KEY, True)

    reopened = JsonSettings(path)

    assert reopened.get_list(TICKERS_KEY) == ["AAPL", "MSFT"]
    assert reopened.get_bool(MARQUEE_KEY) is True
    assert json.loads(path.read_text(encoding="utf-8")) == {
        MARQUEE_KEY: True,
        TICKERS_KEY: ["AAPL", "MSFT"],
    }


def test_missing_file_yields_defaults(tmp_path) -> None:
    settings = JsonSettings(tmp_path / "absent.json")
    assert settings.get_list(TICKERS_KEY) is None
    assert settings.get_bool(MARQUEE_KEY) is False
    assert settings.get_bool(MARQUEE_KEY, default=True) is True


def test_corrupt_file_falls_back_to_defaults(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    settings = JsonSettings(path)

    assert settings.get_list(TICKERS_KEY) is None
    settings.set_bool(MARQUEE_KEY, False)
    assert json.loads(path.read_text(encoding="utf-8")) == {MARQUEE_KEY: False}


def test_wrong_types_are_ignored(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({TICKERS_KEY: "AAPL", MARQUEE_KEY: "yes"}), encoding="utf-8")

    settings = JsonSettings(path)

    assert settings.get_list(TICKERS_KEY) is None
    assert settings.get_bool(MARQUEE_KEY) is False


def test_no_temp_files_left_behind(tmp_path) -> None:
    settings = JsonSettings(tmp_path / "settings.json")
    settings.set_list(TICKERS_KEY, ["A"])
    settings.set_list(TICKERS_KEY, ["B"])
    assert sorted(p.name for p in tmp_path.iterdir()) == ["settings.json"]

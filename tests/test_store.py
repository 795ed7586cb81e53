from __future__ import annotations

import pytest

from tickerbar.errors import LimitExceeded
from tickerbar.settings import TICKERS_KEY, MemorySettings
from tickerbar.store import DEFAULT_TICKERS, TickerListStore, parse_ticker_text


def _store(saved: list[str] | None = None) -> tuple[TickerListStore, MemorySettings]:
    settings = MemorySettings()
    if saved is not None:
        settings.set_list(TICKERS_KEY, saved)
    store = TickerListStore(settings)
    store.load()
    return store, settings


def test_load_defaults_when_nothing_persisted() -> None:
    store, _settings = _store()
    assert store.symbols == list(DEFAULT_TICKERS) == ["SPX", "IXIC", "DJI", "AAPL"]


def test_load_normalizes_persisted_list() -> None:
    store, _settings = _store([" aapl", "MSFT", "AAPL", "", *[f"T{i}" for i in range(12)]])
    assert store.symbols[:2] == ["AAPL", "MSFT"]
    assert len(store) == 10


def test_empty_persisted_list_is_respected() -> None:
    store, _settings = _store([])
    assert store.symbols == []


def test_replace_all_trims_uppercases_and_dedupes_in_order() -> None:
    store, settings = _store()
    assert store.replace_all("aapl, msft\nAAPL") == ["AAPL", "MSFT"]
    assert settings.get_list(TICKERS_KEY) == ["AAPL", "MSFT"]


def test_replace_all_truncates_silently_to_limit() -> None:
    store, _settings = _store()
    result = store.replace_all(",".join(f"s{i}" for i in range(15)))
    assert result == [f"S{i}" for i in range(10)]


def test_replace_all_with_no_symbols_keeps_list() -> None:
    store, _settings = _store()
    assert store.replace_all(" ,\n , ") == list(DEFAULT_TICKERS)


def test_parse_ticker_text_handles_crlf_and_blank_lines() -> None:
    assert parse_ticker_text("tsla\r\n\r\n nvda ,, tsla") == ["TSLA", "NVDA"]


def test_add_normalizes_and_ignores_duplicates() -> None:
    store, settings = _store()
    assert store.add("  tsla ") is True
    assert store.add("TSLA") is False
    assert store.add("aapl") is False
    assert store.add("   ") is False
    assert store.symbols == ["SPX", "IXIC", "DJI", "AAPL", "TSLA"]
    assert settings.get_list(TICKERS_KEY) == store.symbols


def test_adding_eleventh_symbol_raises_and_leaves_list_unchanged() -> None:
    full = [f"S{i}" for i in range(10)]
    store, settings = _store(full)

    with pytest.raises(LimitExceeded) as excinfo:
        store.add("EXTRA")

    assert excinfo.value.limit == 10
    assert store.symbols == full
    assert settings.get_list(TICKERS_KEY) == full


def test_duplicate_add_on_full_list_still_hits_the_limit() -> None:
    full = [f"S{i}" for i in range(10)]
    store, _settings = _store(full)
    with pytest.raises(LimitExceeded):
        store.add("s3")
    assert store.symbols == full


def test_duplicate_add_below_limit_is_a_noop() -> None:
    store, settings = _store()
    assert store.add(" aapl ") is False
    assert store.symbols == ["SPX", "IXIC", "DJI", "AAPL"]
    assert settings.get_list(TICKERS_KEY) is None


def test_remove_and_reset_persist() -> None:
    store, settings = _store()
    assert store.remove("dji") is True
    assert store.remove("DJI") is False
    assert settings.get_list(TICKERS_KEY) == ["SPX", "IXIC", "AAPL"]

    store.replace_all("X, Y")
    assert store.reset() == list(DEFAULT_TICKERS)
    assert settings.get_list(TICKERS_KEY) == list(DEFAULT_TICKERS)


def test_listeners_see_every_mutation() -> None:
    store, _settings = _store()
    seen: list[list[str]] = []
    store.add_listener(seen.append)

    store.add("TSLA")
    store.remove("SPX")
    store.replace_all("A,B")
    store.reset()

    assert seen == [
        ["SPX", "IXIC", "DJI", "AAPL", "TSLA"],
        ["IXIC", "DJI", "AAPL", "TSLA"],
        ["A", "B"],
        list(DEFAULT_TICKERS),
    ]


def test_index_of_and_contains_are_case_insensitive() -> None:
    store, _settings = _store()
    assert store.index_of("aapl") == 3
    assert store.index_of("MSFT") is None
    assert "dji" in store

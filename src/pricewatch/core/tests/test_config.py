"""Tests for Settings."""

import pytest

from pricewatch.core.config import Settings


def test_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRICEWATCH_CRON_SECRET", "from-env")
    monkeypatch.setenv("PRICEWATCH_FETCH_TIMEOUT_SECONDS", "2.5")

    settings = Settings()

    assert settings.cron_secret == "from-env"
    assert settings.fetch_timeout_seconds == 2.5


def test_explicit_values_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRICEWATCH_PORT", "9000")
    assert Settings(port=8123).port == 8123


@pytest.mark.parametrize(("value", "expected"), [(15.0, 15.0), (0, None), (None, None)])
def test_effective_fetch_timeout(value: float | None, expected: float | None) -> None:
    assert Settings(fetch_timeout_seconds=value).effective_fetch_timeout == expected

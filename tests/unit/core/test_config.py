"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import ChronotabConfig, parse_merge_mode
from core.errors import ChronotabConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to union merge and utf-8-sig decoding."""
    monkeypatch.delenv("CHRONOTAB_MERGE_MODE", raising=False)
    monkeypatch.delenv("CHRONOTAB_SOURCE_ENCODING", raising=False)
    monkeypatch.delenv("CHRONOTAB_LOG_LEVEL", raising=False)

    config = ChronotabConfig.from_env()

    assert (config.merge_mode, config.source_encoding, config.log_level) == (
        "union",
        "utf-8-sig",
        "INFO",
    )


def test_from_env_normalizes_merge_mode_and_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should accept mixed-case values."""
    monkeypatch.setenv("CHRONOTAB_MERGE_MODE", " Strict ")
    monkeypatch.setenv("CHRONOTAB_LOG_LEVEL", "debug")

    config = ChronotabConfig.from_env()

    assert config.merge_mode == "strict" and config.log_level == "DEBUG"


def test_from_env_raises_for_unknown_encoding(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for codecs Python does not know."""
    monkeypatch.setenv("CHRONOTAB_SOURCE_ENCODING", "not-a-codec")

    with pytest.raises(ChronotabConfigError):
        ChronotabConfig.from_env()


def test_parse_merge_mode_rejects_unknown_mode() -> None:
    """Merge mode parsing should only accept union and strict."""
    with pytest.raises(ChronotabConfigError):
        parse_merge_mode("intersect")

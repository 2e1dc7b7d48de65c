"""Tests for logging helpers."""

import logging

from common.logging_utils import configure_logging, extra_context, is_debug_enabled, safe_url, Timer


def test_safe_url_masks_credentials():
    masked = safe_url("https://user:pw@repo.example/search?q=x&token=abc")

    assert "pw" not in masked
    assert "abc" not in masked
    assert masked.startswith("https://***@repo.example/search?")
    assert "q=x" in masked


def test_safe_url_leaves_plain_urls():
    assert safe_url("https://search.maven.org/solrsearch/select") == (
        "https://search.maven.org/solrsearch/select"
    )


def test_extra_context_drops_none():
    assert extra_context(event="x", status_code=None, count=0) == {"event": "x", "count": 0}


def test_configure_logging_sets_level(monkeypatch):
    monkeypatch.setenv("DEPBUMP_LOG_LEVEL", "warning")
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging()
        assert root.level == logging.WARNING
        configure_logging("debug")
        assert is_debug_enabled(logging.getLogger("depbump.test"))
    finally:
        root.setLevel(previous)


def test_timer_measures():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0

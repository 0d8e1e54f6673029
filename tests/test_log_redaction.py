from __future__ import annotations

import logging

from app import _RedactingFormatter


def _record(message: str, *args) -> logging.LogRecord:
    return logging.LogRecord("tabsweep", logging.INFO, __file__, 1, message, args, None)


def test_query_strings_are_masked() -> None:
    formatter = _RedactingFormatter(True, fmt="%(message)s")

    line = formatter.format(_record("Restoring %s", "https://example.com/login?token=secret#top"))

    assert line == "Restoring https://example.com/login?***#top"


def test_urls_without_query_are_untouched() -> None:
    formatter = _RedactingFormatter(True, fmt="%(message)s")

    assert formatter.format(_record("Opened https://example.com/a")) == "Opened https://example.com/a"


def test_redaction_can_be_disabled() -> None:
    formatter = _RedactingFormatter(False, fmt="%(message)s")

    assert formatter.format(_record("https://example.com/?q=1")) == "https://example.com/?q=1"

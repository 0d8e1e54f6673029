"""Application entry point for tabsweep."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

import httpx
from art import tprint

import settings
from adapters.json_rule_store import JsonRuleStore
from adapters.report_formatting import format_batch_lines, format_closed_label, format_result
from adapters.sqlite_storage import SQLiteStorage
from client import build_browser
from core.config import SweepConfig
from core.messages import MessageRouter
from core.processor import TabSweeper
from core.rules_engine import build_rules, find_rule

NAME = "TABSWEEP"
FONT = "tarty-1"

_QUERY_IN_URL = re.compile(r"(\b[a-z][a-z0-9+.-]*://[^\s?#]+)\?[^\s#]*", re.IGNORECASE)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    """Formatter that hides URL query strings, which often carry tokens."""

    def __init__(self, redact_queries: bool, fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._redact_queries = redact_queries

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if self._redact_queries:
            message = _QUERY_IN_URL.sub(r"\1?***", message)
        return message


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = _RedactingFormatter(bool(config.get("redact_queries", True)), fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/tabsweep.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _open_storage() -> SQLiteStorage:
    storage = SQLiteStorage(settings.DB_PATH)
    storage.init_db()
    return storage


def build_router(storage: SQLiteStorage, browser) -> MessageRouter:
    """Wire the sweeper and rule store behind the message interface."""

    sweeper = TabSweeper(
        browser=browser,
        batch_store=storage,
        config=SweepConfig(
            internal_prefixes=settings.INTERNAL_PREFIXES,
            window_scope=settings.WINDOW_SCOPE,
        ),
    )
    return MessageRouter(sweeper, JsonRuleStore(settings.CONFIG_PATH))


async def _dispatch(request: dict) -> dict:
    storage = _open_storage()
    browser = build_browser(storage)
    try:
        return await build_router(storage, browser).handle(request)
    finally:
        await browser.aclose()


def _run_request(request: dict) -> int:
    """Send one request through the router, print the outcome, return exit code."""

    logger = logging.getLogger(__name__)
    try:
        response = asyncio.run(_dispatch(request))
    except httpx.HTTPError as exc:
        logger.error("Browser request failed: %s", exc)
        print(f"Failed: could not reach the browser DevTools endpoint ({exc})")
        return 1
    print(format_result(response))
    return 0 if response.get("success") else 1


def _run_default() -> int:
    logging.getLogger(__name__).info("Closing duplicates with the default rule")
    storage = _open_storage()
    removed = storage.cleanup_targets(settings.TARGET_TTL_DAYS)
    if removed:
        logging.getLogger(__name__).info("Registry cleanup removed %s targets", removed)
    return _run_request({"action": "execute_default_rule"})


def _run_custom(name: str) -> int:
    store = JsonRuleStore(settings.CONFIG_PATH)
    try:
        rule = find_rule(build_rules(store.load_rules()), name)
    except KeyError:
        print(f"Failed: no rule named {name!r}")
        return 1
    except ValueError as exc:
        print(f"Failed: {exc}")
        return 1
    return _run_request({"action": "execute_custom_rule", "name": rule.name, "pattern": rule.pattern})


def _status() -> int:
    storage = _open_storage()
    batch = storage.load_closed_batch()
    print(format_closed_label(batch.count if batch else 0))
    if batch is not None:
        snapshots = [{"id": tab.id, "url": tab.url, "title": tab.title} for tab in batch.tabs]
        for line in format_batch_lines(snapshots):
            print(f"  {line}")
    return 0


def _setup() -> None:
    _print_banner()
    from frontend.app import ControlPanelApp

    storage = _open_storage()
    browser = build_browser(storage)
    ControlPanelApp(router=build_router(storage, browser), on_shutdown=browser.aclose).run()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="tabsweep")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Close duplicate tabs (ignores URL parameters)")
    rule_parser = subparsers.add_parser("rule", help="Run a custom rule from config.json")
    rule_parser.add_argument("name")
    test_parser = subparsers.add_parser("test", help="Show tabs a regex would match, without closing")
    test_parser.add_argument("pattern")
    subparsers.add_parser("restore", help="Reopen the tabs closed last time")
    subparsers.add_parser("status", help="Show the last closed batch")
    subparsers.add_parser("config", help="Launch the control panel TUI")

    args = parser.parse_args(argv)
    if args.command == "config":
        _setup()
        return

    _configure_logging()
    if args.command == "rule":
        code = _run_custom(args.name)
    elif args.command == "test":
        code = _run_request({"action": "test_custom_rule", "pattern": args.pattern})
    elif args.command == "restore":
        code = _run_request({"action": "restore_last_closed"})
    elif args.command == "status":
        code = _status()
    else:
        code = _run_default()
    sys.exit(code)


if __name__ == "__main__":
    main()

"""Accumulates console, error and network events for one browser page."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class SessionCollector:
    """Listens to a Playwright page and keeps what it saw as plain strings.

    Nothing collected here fails a session; the lists are reported at the end.
    """

    def __init__(self, watch: list[str] | None = None):
        self.watch = list(watch or [])
        self.console: list[str] = []
        self.page_errors: list[str] = []
        self.error_stacks: list[str] = []
        self.failed_requests: list[str] = []
        self.watched_responses: list[str] = []
        self.crashes: list[str] = []

    def attach(self, page: Any) -> None:
        page.on("console", self.on_console)
        page.on("pageerror", self.on_page_error)
        page.on("requestfailed", self.on_request_failed)
        page.on("response", self.on_response)
        page.on("crash", self.on_crash)

    def on_console(self, msg: Any) -> None:
        self.console.append(f"{msg.type}: {msg.text}")

    def on_page_error(self, error: Any) -> None:
        message = getattr(error, "message", None)
        self.page_errors.append(message if message is not None else str(error))
        stack = getattr(error, "stack", None)
        if stack:
            self.error_stacks.append(stack)

    def on_request_failed(self, request: Any) -> None:
        self.failed_requests.append(f"{request.url} - {request.failure}")

    def on_response(self, response: Any) -> None:
        if response.status >= 400:
            self.failed_requests.append(f"{response.status} {response.url}")
        if any(pattern in response.url for pattern in self.watch):
            self.watched_responses.append(f"{response.status} {response.url}")

    def on_crash(self, page: Any) -> None:
        logger.error("Page crashed: %s", getattr(page, "url", "?"))
        self.crashes.append(f"page crashed: {getattr(page, 'url', '?')}")


def lines_matching(lines: list[str], *keywords: str) -> list[str]:
    """Lines containing any of the keywords, case-sensitive, in their original order."""
    return [line for line in lines if any(k in line for k in keywords)]

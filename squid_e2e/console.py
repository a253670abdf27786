"""Browser console error capture for page-load tests."""
from __future__ import annotations

import re
from typing import List, Sequence

from playwright.async_api import ConsoleMessage, Page

# Console errors that do not indicate a broken page
KNOWN_BENIGN_PATTERNS = [
    r"favicon",
    r"404",
]


def is_known_error(error_text: str, patterns: Sequence[str] = KNOWN_BENIGN_PATTERNS) -> bool:
    """Check if an error matches a known pattern to ignore."""
    return any(re.search(pattern, error_text) for pattern in patterns)


class ConsoleErrorCollector:
    """Collects ``console.error`` messages emitted by a page.

    Attach before navigating so errors raised during load are not missed.
    """

    def __init__(self, patterns: Sequence[str] = KNOWN_BENIGN_PATTERNS) -> None:
        self.patterns = list(patterns)
        self.errors: List[str] = []

    def attach(self, page: Page) -> "ConsoleErrorCollector":
        page.on("console", self._on_console)
        return self

    def _on_console(self, message: ConsoleMessage) -> None:
        if message.type == "error":
            self.record(message.text)

    def record(self, text: str) -> None:
        self.errors.append(text)

    def critical_errors(self) -> List[str]:
        return [error for error in self.errors if not is_known_error(error, self.patterns)]

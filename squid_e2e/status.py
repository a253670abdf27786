"""Status-code classes and the range assertions the API tests rely on.

The tests treat each service as opaque, so they only check which class a
status falls into (success, client error, server error) or whether it sits
in a small allowed set. Every failing check raises ``AssertionError`` with
the request, the expectation, the actual status and a body preview.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from squid_e2e.api import ServiceResponse


class StatusClass(str, Enum):
    INFORMATIONAL = "informational"
    OK = "ok"
    REDIRECT = "redirect"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"


def classify(status: int) -> StatusClass:
    if 100 <= status < 200:
        return StatusClass.INFORMATIONAL
    if 200 <= status < 300:
        return StatusClass.OK
    if 300 <= status < 400:
        return StatusClass.REDIRECT
    if 400 <= status < 500:
        return StatusClass.CLIENT_ERROR
    if 500 <= status < 600:
        return StatusClass.SERVER_ERROR
    # outside 100-599
    return StatusClass.UNKNOWN


def _fail(response: "ServiceResponse", expectation: str) -> None:
    message = f"{response.describe()}: expected status {expectation}, got {response.status}"
    preview = response.body_preview()
    if preview:
        message += f"\nBody: {preview}"
    raise AssertionError(message)


def expect_status(response: "ServiceResponse", expected: int) -> None:
    if response.status != expected:
        _fail(response, f"== {expected}")


def expect_ok(response: "ServiceResponse") -> None:
    if classify(response.status) is not StatusClass.OK:
        _fail(response, "2xx")


def expect_status_in(response: "ServiceResponse", allowed: Iterable[int]) -> None:
    allowed = sorted(set(allowed))
    if response.status not in allowed:
        _fail(response, f"in {allowed}")


def expect_status_not(response: "ServiceResponse", forbidden: int) -> None:
    if response.status == forbidden:
        _fail(response, f"!= {forbidden}")


def expect_status_below(response: "ServiceResponse", bound: int) -> None:
    if not response.status < bound:
        _fail(response, f"< {bound}")


def expect_status_between(response: "ServiceResponse", low: int, high: int) -> None:
    """Inclusive on both ends."""
    if not low <= response.status <= high:
        _fail(response, f"in [{low}, {high}]")

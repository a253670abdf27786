"""Shared configuration for the Squid test suites.

Values come from the process environment first, then from the repository
`.env.defaults` file, then from built-in defaults.

Target selection:
- remote (default): test the deployment at E2E_BASE_URL
- mock: start the in-process mock deployment on E2E_MOCK_PORT and test against it

Without E2E_BASE_URL (and outside mock mode) no profile exists and every
deployment test is skipped; the harness self-checks still run.
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Literal, Mapping, Optional
from urllib.parse import urljoin

from squid_e2e.env_defaults import get_env_default

TargetKind = Literal["remote", "mock"]

DEFAULT_TITLE_PATTERN = "Squid"
DEFAULT_MOCK_PORT = 5580
MOCK_HOST = "127.0.0.1"


@dataclass
class E2eTargetProfile:
    """One deployment under test: where the UI and API live, plus credentials."""

    name: str
    base_url: str
    api_base_url: str
    username: str | None = None
    password: str | None = None
    target: str = "remote"


def _truthy(value: str) -> bool:
    return value.lower() in {"true", "1", "yes"}


class E2eConfig:
    """Run settings plus the set of target profiles.

    The singleton ``settings`` below reads the real environment. Tests of the
    harness itself build their own instance from a plain mapping.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        defaults: Callable[[str], str | None] = get_env_default,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._defaults = defaults

        self.playwright_headless: bool = _truthy(self._get("PLAYWRIGHT_HEADLESS", "true"))
        self.playwright_browser: str = self._get("PLAYWRIGHT_BROWSER", "chromium")
        self.playwright_timeout_ms: int = int(self._get("PLAYWRIGHT_TIMEOUT_MS", "30000"))
        self.http_timeout: float = float(self._get("E2E_HTTP_TIMEOUT", "30"))
        self.title_pattern: str = self._get("E2E_TITLE_PATTERN", DEFAULT_TITLE_PATTERN)
        self.settle_short: float = float(self._get("E2E_SETTLE_SHORT", "1"))
        self.settle_long: float = float(self._get("E2E_SETTLE_LONG", "2"))

        target = self._get("E2E_TARGET", "remote").lower()
        if target not in {"remote", "mock"}:
            raise RuntimeError(f"E2E_TARGET must be 'remote' or 'mock', got {target!r}")
        self.target: TargetKind = target  # type: ignore[assignment]
        self.mock_port: int = int(self._get("E2E_MOCK_PORT", str(DEFAULT_MOCK_PORT)))

        username = self._get("E2E_USERNAME") or None
        password = self._get("E2E_PASSWORD") or None

        self._profiles: Dict[str, E2eTargetProfile] = {}

        base_url = self._get("E2E_BASE_URL")
        if self.target == "mock":
            mock_url = f"http://{MOCK_HOST}:{self.mock_port}"
            primary = E2eTargetProfile(
                name="mock",
                base_url=mock_url,
                api_base_url=mock_url,
                username=username,
                password=password,
                target="mock",
            )
            self._profiles[primary.name] = primary
        elif base_url:
            primary = E2eTargetProfile(
                name="primary",
                base_url=base_url,
                api_base_url=self._get("E2E_API_BASE_URL") or base_url,
                username=username,
                password=password,
            )
            self._profiles[primary.name] = primary

        # Optional smoke profile, e.g. a production host tested alongside staging
        smoke_base = self._get("E2E_SMOKE_BASE_URL")
        if smoke_base:
            smoke = E2eTargetProfile(
                name="smoke",
                base_url=smoke_base,
                api_base_url=self._get("E2E_SMOKE_API_BASE_URL") or smoke_base,
                username=self._get("E2E_SMOKE_USERNAME") or username,
                password=self._get("E2E_SMOKE_PASSWORD") or password,
            )
            self._profiles[smoke.name] = smoke

        self._active: E2eTargetProfile | None = next(iter(self._profiles.values()), None)

        if self._active is None:
            print("[CONFIG] No deployment configured (set E2E_BASE_URL or E2E_TARGET=mock); deployment tests will be skipped")
        else:
            names = ", ".join(f"{p.name}={p.base_url}" for p in self._profiles.values())
            print(f"[CONFIG] Test targets: {names}")

    def _get(self, key: str, fallback: str = "") -> str:
        value = self._environ.get(key)
        if value:
            return value
        return self._defaults(key) or fallback

    # ---- active profile helpers -------------------------------------------------
    @property
    def configured(self) -> bool:
        return self._active is not None

    @property
    def active(self) -> E2eTargetProfile:
        if self._active is None:
            raise RuntimeError(
                "No deployment configured.\n"
                "Set E2E_BASE_URL to test a running deployment, "
                "or E2E_TARGET=mock to test against the in-process mock."
            )
        return self._active

    @property
    def base_url(self) -> str:
        return self.active.base_url

    @property
    def api_base_url(self) -> str:
        return self.active.api_base_url

    # ---- profile orchestration --------------------------------------------------
    def profiles(self) -> List[E2eTargetProfile]:
        return list(self._profiles.values())

    def uses_mock(self) -> bool:
        return any(p.target == "mock" for p in self._profiles.values())

    @contextmanager
    def use_profile(self, profile: E2eTargetProfile) -> Iterator[E2eTargetProfile]:
        """Temporarily switch the active profile.

        The active profile is a copy, so a test mutating it cannot leak the
        change into the next parametrized run.
        """
        previous = self._active
        self._active = deepcopy(profile)
        try:
            yield self._active
        finally:
            self._active = previous

    # ---- utility helpers --------------------------------------------------------
    def url(self, path: str) -> str:
        """Return an absolute UI URL for the provided path."""
        return join_url(self.base_url, path)

    def api_url(self, path: str) -> str:
        """Return an absolute API URL for the provided path."""
        return join_url(self.api_base_url, path)


def join_url(base: str, path: str) -> str:
    return urljoin(base.rstrip("/") + "/", path.lstrip("/"))


settings = E2eConfig()

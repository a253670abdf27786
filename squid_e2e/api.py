"""HTTP side of the test harness.

A test describes one request (``ServiceRequest``), sends it through
``ServiceApi`` and gets back a ``ServiceResponse`` that lives just long
enough for one status assertion. Redirects are followed (httpx caps them
at 20) and only the final status is observed. Non-2xx statuses are never
raised; transport failures (refused connection, DNS, timeout) propagate
unchanged so they surface as test errors rather than assertion failures.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from squid_e2e.config import settings
from squid_e2e.services import ServiceDomain
from squid_e2e.status import StatusClass, classify

logger = logging.getLogger(__name__)

BODY_PREVIEW_CHARS = 300


@dataclass(frozen=True)
class ServiceRequest:
    method: str
    path: str
    json: Optional[Dict[str, Any]] = None
    params: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def get(cls, path: str, **params: str) -> "ServiceRequest":
        return cls("GET", path, params=params)

    @classmethod
    def post(cls, path: str, json: Optional[Dict[str, Any]] = None) -> "ServiceRequest":
        return cls("POST", path, json=json)


@dataclass
class ServiceResponse:
    method: str
    url: str
    status: int
    body: bytes = b""

    @property
    def status_class(self) -> StatusClass:
        return classify(self.status)

    @property
    def ok(self) -> bool:
        return self.status_class is StatusClass.OK

    def describe(self) -> str:
        return f"{self.method} {self.url}"

    def body_preview(self) -> str:
        text = self.body.decode("utf-8", errors="replace").strip()
        if len(text) > BODY_PREVIEW_CHARS:
            return text[:BODY_PREVIEW_CHARS] + "..."
        return text


class ServiceApi:
    """Sends test requests through an ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def send(self, request: ServiceRequest) -> ServiceResponse:
        kwargs: Dict[str, Any] = {}
        if request.params:
            kwargs["params"] = request.params
        if request.json is not None:
            kwargs["json"] = request.json

        response = await self._client.request(request.method, request.path, **kwargs)
        logger.debug("%s %s -> %s", request.method, response.request.url, response.status_code)
        return ServiceResponse(
            method=request.method,
            url=str(response.request.url),
            status=response.status_code,
            body=response.content,
        )

    async def get(self, path: str, **params: str) -> ServiceResponse:
        return await self.send(ServiceRequest.get(path, **params))

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> ServiceResponse:
        return await self.send(ServiceRequest.post(path, json=json))

    async def health(self, domain: ServiceDomain) -> ServiceResponse:
        return await self.get(domain.health_path)


@asynccontextmanager
async def service_api_session(base_url: Optional[str] = None) -> AsyncIterator[ServiceApi]:
    """Yield a ``ServiceApi`` bound to the active profile's API base URL."""
    async with httpx.AsyncClient(
        base_url=base_url or settings.api_base_url,
        timeout=settings.http_timeout,
        follow_redirects=True,
        verify=False,
    ) as client:
        yield ServiceApi(client)

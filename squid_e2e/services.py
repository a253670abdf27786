"""The Squid service domains the API tests address.

Each backend service is deployed under its own codename but exposes its
routes under ``/api/<name>/``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ServiceDomain:
    name: str
    codename: str

    @property
    def prefix(self) -> str:
        return f"/api/{self.name}"

    @property
    def health_path(self) -> str:
        return f"{self.prefix}/health"

    def path(self, *segments: object) -> str:
        """Build a path below this domain's prefix, e.g. ``path("stock", 1)``."""
        parts = [str(segment).strip("/") for segment in segments]
        return "/".join([self.prefix, *parts]) if parts else self.prefix


AUTH = ServiceDomain("auth", "kraken-auth")
CATALOG = ServiceDomain("catalog", "clam-catalog")
ORDERS = ServiceDomain("orders", "cuttlefish-orders")
INVENTORY = ServiceDomain("inventory", "nautilus-inventory")
PAYMENTS = ServiceDomain("payments", "octopus-payments")
REVIEWS = ServiceDomain("reviews", "barnacle-reviews")

ALL_DOMAINS: List[ServiceDomain] = [AUTH, CATALOG, ORDERS, INVENTORY, PAYMENTS, REVIEWS]


def domain_id(domain: ServiceDomain) -> str:
    """Readable pytest id for parametrized domain tests."""
    return domain.codename

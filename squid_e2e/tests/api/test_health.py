"""Health and liveness tests for every Squid service.

Run with: pytest squid_e2e/tests/api/test_health.py -v
"""
import pytest

from squid_e2e.api import service_api_session
from squid_e2e.services import ALL_DOMAINS, ServiceDomain, domain_id
from squid_e2e.status import expect_ok, expect_status, expect_status_below


pytestmark = [pytest.mark.asyncio, pytest.mark.api]


@pytest.mark.parametrize("domain", ALL_DOMAINS, ids=domain_id)
class TestServiceHealth:
    async def test_health_check(self, active_profile, domain: ServiceDomain):
        """Health endpoint answers exactly 200."""
        async with service_api_session() as api:
            response = await api.health(domain)

        expect_ok(response)
        expect_status(response, 200)

    async def test_responds_to_health_checks(self, active_profile, domain: ServiceDomain):
        """Any status short of a server error passes."""
        async with service_api_session() as api:
            response = await api.health(domain)

        expect_status_below(response, 500)

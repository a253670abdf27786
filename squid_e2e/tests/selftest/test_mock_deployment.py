"""Storefront pages served by the mock deployment."""
import httpx
import pytest

from squid_e2e.mock_deployment import SESSION_COOKIE


pytestmark = pytest.mark.selftest


def test_home_page_has_title_navigation_and_cookie(mock_deployment):
    response = httpx.get(f"{mock_deployment.url}/")

    assert response.status_code == 200
    assert "<title>Home | Squid Shop</title>" in response.text
    assert "<nav>" in response.text
    assert "<footer>" in response.text
    assert SESSION_COOKIE in response.cookies


def test_login_page_renders_form(mock_deployment):
    response = httpx.get(f"{mock_deployment.url}/login")

    assert response.status_code == 200
    assert 'type="password"' in response.text
    assert 'type="submit"' in response.text


def test_empty_login_submit_shows_alert(mock_deployment):
    response = httpx.post(f"{mock_deployment.url}/login", data={})

    assert response.status_code == 400
    assert 'role="alert"' in response.text


def test_catalog_lists_products(mock_deployment):
    response = httpx.get(f"{mock_deployment.url}/catalog")

    assert response.status_code == 200
    assert response.text.count('class="product-card"') == 3
    assert 'type="search"' in response.text


def test_missing_page_is_html_404(mock_deployment):
    response = httpx.get(f"{mock_deployment.url}/this-page-does-not-exist-12345")

    assert response.status_code == 404
    assert "Page not found" in response.text


def test_orders_accept_login_token(mock_deployment):
    from squid_e2e.mock_deployment import MOCK_PASSWORD, MOCK_USERNAME

    login = httpx.post(
        f"{mock_deployment.url}/api/auth/login",
        json={"username": MOCK_USERNAME, "password": MOCK_PASSWORD},
    )
    token = login.json()["token"]

    orders = httpx.get(f"{mock_deployment.url}/api/orders", headers={"Authorization": f"Bearer {token}"})
    payment = httpx.post(
        f"{mock_deployment.url}/api/payments/process",
        json={},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert orders.status_code == 200
    assert payment.status_code == 400


def test_start_raises_when_server_never_answers(monkeypatch):
    from squid_e2e import mock_deployment as module

    def refuse(*args, **kwargs):
        raise httpx.ConnectError("connection refused")

    monkeypatch.setattr(module.httpx, "get", refuse)
    monkeypatch.setattr(module.time, "sleep", lambda seconds: None)

    server = module.MockDeploymentServer()
    with pytest.raises(RuntimeError, match="did not answer"):
        server.start()

    assert server.server is None


def test_catalog_status_moved_permanently(mock_deployment):
    response = httpx.get(f"{mock_deployment.url}/api/catalog/status")

    assert response.status_code == 301
    assert response.headers["location"].endswith("/api/catalog/health")

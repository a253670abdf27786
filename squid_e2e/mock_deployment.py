"""Mock Squid deployment for harness self-checks.

Serves the HTTP surface the tests consume, with the same status behavior a
healthy deployment shows:
- /api/<domain>/health for all six services
- kraken-auth login (400 on missing fields, 401 on bad credentials)
- clam-catalog products, product by id, search
- cuttlefish-orders and octopus-payments behind a bearer token
- nautilus-inventory stock by product id
- barnacle-reviews list and per-product reviews
- two moved routes answering 301 (one to a health check, one to a 404)
- storefront pages: /, /login, /catalog, /catalog/<id>, and an HTML 404

State lives in module-level dicts; call ``reset_mock_state()`` between uses.
"""
from __future__ import annotations

import logging
import secrets
import threading
import time
from typing import Any, Dict, List, Optional, Set

import httpx
from flask import Flask, jsonify, make_response, redirect, render_template_string, request
from werkzeug.serving import make_server

from squid_e2e.services import ALL_DOMAINS, CATALOG

logger = logging.getLogger(__name__)

MOCK_USERNAME = "squid-tester"
MOCK_PASSWORD = "ink-and-tentacles"
SESSION_COOKIE = "squid_session"

PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Test Tube Reef Starter", "price": "19.90"},
    {"id": 2, "name": "Deep Sea Lantern", "price": "42.00"},
    {"id": 3, "name": "Ink Cartridge (Black)", "price": "7.50"},
]
STOCK: Dict[int, int] = {1: 12, 2: 0, 3: 250}
REVIEWS: List[Dict[str, Any]] = [
    {"id": 1, "product_id": 1, "rating": 5, "text": "Reef is thriving."},
    {"id": 2, "product_id": 2, "rating": 3, "text": "Bright, but heavy."},
]

TOKENS: Set[str] = set()


def reset_mock_state() -> None:
    TOKENS.clear()


def _product(product_id: int) -> Optional[Dict[str, Any]]:
    return next((p for p in PRODUCTS if p["id"] == product_id), None)


def _bearer_valid() -> bool:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return False
    return header[len("Bearer "):] in TOKENS


PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>{{ title }} | Squid Shop</title></head>
<body>
  <header>
    <nav>
      <a href="/">Home</a>
      <a href="/catalog">Catalog</a>
      <a href="/login">Login</a>
    </nav>
  </header>
  <main>{{ body|safe }}</main>
  <footer><p>Squid Shop, serving the seven seas.</p></footer>
</body>
</html>
"""

HOME_BODY = """
<h1>Welcome to Squid Shop</h1>
<p>Everything for the discerning cephalopod, from reef kits to ink refills.
Browse the catalog or sign in to see your orders.</p>
"""

LOGIN_BODY = """
<h1>Sign in</h1>
{% if error %}<div class="alert alert-error" role="alert">{{ error }}</div>{% endif %}
<form method="post" action="/login">
  <input type="text" name="username" placeholder="Username">
  <input type="password" name="password" placeholder="Password">
  <button type="submit">Sign In</button>
</form>
"""

CATALOG_BODY = """
<h1>Catalog</h1>
<input type="search" name="search" placeholder="Search products">
<ul class="product-list">
{% for product in products %}
  <li class="product-card"><a href="/catalog/{{ product.id }}">{{ product.name }}</a> {{ product.price }}</li>
{% endfor %}
</ul>
"""

DETAIL_BODY = """
<h1>{{ product.name }}</h1>
<p class="price">{{ product.price }}</p>
"""

NOT_FOUND_BODY = """
<h1>Page not found</h1>
<p>The page you were looking for drifted away with the current.</p>
"""


def _page(title: str, body: str, **context: Any) -> str:
    return render_template_string(
        PAGE_TEMPLATE,
        title=title,
        body=render_template_string(body, **context),
    )


def create_mock_deployment_app() -> Flask:
    """Create the Flask app standing in for a whole Squid deployment."""
    app = Flask(__name__)
    app.config['TESTING'] = True

    # ---- health -----------------------------------------------------------------
    for domain in ALL_DOMAINS:
        def health(domain=domain):
            return jsonify({"status": "ok", "service": domain.codename})

        app.add_url_rule(domain.health_path, f"{domain.name}_health", health)

    # ---- kraken-auth ------------------------------------------------------------
    @app.route('/api/auth/login', methods=['POST'])
    def auth_login():
        data = request.get_json(silent=True) or {}
        username = data.get("username")
        password = data.get("password")
        if not username or not password:
            return jsonify({"error": "username and password are required"}), 400
        if username != MOCK_USERNAME or password != MOCK_PASSWORD:
            return jsonify({"error": "invalid credentials"}), 401
        token = secrets.token_hex(16)
        TOKENS.add(token)
        return jsonify({"token": token})

    # ---- clam-catalog -----------------------------------------------------------
    @app.route('/api/catalog/products')
    def catalog_products():
        search = request.args.get("search", "").lower()
        items = [p for p in PRODUCTS if search in p["name"].lower()]
        return jsonify({"items": items, "total": len(items)})

    @app.route('/api/catalog/products/<int:product_id>')
    def catalog_product(product_id: int):
        product = _product(product_id)
        if product is None:
            return jsonify({"error": "product not found"}), 404
        return jsonify(product)

    # ---- cuttlefish-orders ------------------------------------------------------
    @app.route('/api/orders')
    def orders():
        if not _bearer_valid():
            return jsonify({"error": "authentication required"}), 401
        return jsonify({"items": []})

    # ---- nautilus-inventory -----------------------------------------------------
    @app.route('/api/inventory/stock/<int:product_id>')
    def inventory_stock(product_id: int):
        if product_id not in STOCK:
            return jsonify({"error": "unknown product"}), 404
        return jsonify({"product_id": product_id, "quantity": STOCK[product_id]})

    # ---- octopus-payments -------------------------------------------------------
    @app.route('/api/payments/process', methods=['POST'])
    def payments_process():
        if not _bearer_valid():
            return jsonify({"error": "authentication required"}), 401
        data = request.get_json(silent=True) or {}
        if "order_id" not in data:
            return jsonify({"error": "order_id is required"}), 400
        return jsonify({"status": "accepted", "order_id": data["order_id"]}), 202

    # ---- barnacle-reviews -------------------------------------------------------
    @app.route('/api/reviews')
    def reviews():
        return jsonify({"items": REVIEWS})

    @app.route('/api/reviews/product/<int:product_id>')
    def product_reviews(product_id: int):
        return jsonify({"items": [r for r in REVIEWS if r["product_id"] == product_id]})

    # ---- moved routes -----------------------------------------------------------
    @app.route('/api/catalog/status')
    def catalog_status_moved():
        return redirect(CATALOG.health_path, code=301)

    @app.route('/api/orders/history')
    def orders_history_moved():
        return redirect('/api/orders/archived', code=301)

    # ---- storefront -------------------------------------------------------------
    @app.route('/')
    def home():
        response = make_response(_page("Home", HOME_BODY))
        if SESSION_COOKIE not in request.cookies:
            response.set_cookie(SESSION_COOKIE, secrets.token_hex(8), httponly=True)
        return response

    @app.route('/login', methods=['GET', 'POST'])
    def login_page():
        error = None
        if request.method == 'POST':
            if not request.form.get("username") or not request.form.get("password"):
                error = "Please enter username and password."
            else:
                error = "Invalid username or password."
        return _page("Sign in", LOGIN_BODY, error=error), (200 if error is None else 400)

    @app.route('/catalog')
    def catalog_page():
        return _page("Catalog", CATALOG_BODY, products=PRODUCTS)

    @app.route('/catalog/<int:product_id>')
    def catalog_detail(product_id: int):
        product = _product(product_id)
        if product is None:
            return _page("Not found", NOT_FOUND_BODY), 404
        return _page(product["name"], DETAIL_BODY, product=product)

    @app.errorhandler(404)
    def not_found(_error):
        if request.path.startswith("/api/"):
            return jsonify({"error": "not found"}), 404
        return _page("Not found", NOT_FOUND_BODY), 404

    return app


class MockDeploymentServer:
    """Runs the mock deployment in a background thread.

    ``port=0`` picks a free port; read the bound one from ``port`` after
    ``start()``.
    """

    def __init__(self, host: str = '127.0.0.1', port: int = 0):
        self.host = host
        self.port = port
        self.app = create_mock_deployment_app()
        self.server = None
        self.thread = None

    def start(self) -> None:
        self.server = make_server(self.host, self.port, self.app, threaded=True)
        self.port = self.server.server_port
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()

        # Wait for the listener to answer, 5 seconds max
        for _ in range(50):
            try:
                httpx.get(f"{self.url}{CATALOG.health_path}", timeout=0.5)
                break
            except httpx.TransportError:
                time.sleep(0.1)
        else:
            self.stop()
            raise RuntimeError(f"Mock deployment did not answer on {self.url}")
        logger.info("Mock deployment listening on %s", self.url)

    def stop(self) -> None:
        if self.server:
            self.server.shutdown()
            if self.thread:
                self.thread.join(timeout=5)
            self.server.server_close()
            self.server = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

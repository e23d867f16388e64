"""Shared fixtures: a test app wired to in-memory backends."""

import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from config import TestingConfig
from core.auth import ConfigAuthService
from core.order_store import InMemoryOrderStore
from models.manifest import ProductManifest
from models.order import CustomerDetails, Order, OrderRequest


ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "s3cret-password"


# Fixtures

@pytest.fixture
def sample_manifest():
    """Manifest with one KANGAROO adult color and the standard placeholders."""
    return ProductManifest(
        generated_at="2026-10-19T08:00:00+00:00",
        entries={
            "KANGAROO__adult__bianco": "/products/KANGAROO-Bianco.jpg",
            "KANGAROO__kids__nero": "/products/KANGAROO-Kids-Nero.jpg",
        },
        placeholders={
            "adult": "/products/placeholder-adult.jpg",
            "kids": "/products/placeholder-kids.jpg",
            "standard": "/products/placeholder-adult.jpg",
            "default": "/products/placeholder-adult.jpg",
        },
    )


@pytest.fixture
def order_store():
    return InMemoryOrderStore()


@pytest.fixture
def auth_service():
    return ConfigAuthService(ADMIN_EMAIL, generate_password_hash(ADMIN_PASSWORD))


@pytest.fixture
def app(order_store, auth_service, sample_manifest):
    """Flask app on in-memory backends."""
    app = create_app(
        TestingConfig,
        order_store=order_store,
        auth_service=auth_service,
        manifest=sample_manifest,
    )
    yield app
    app.config["ORDER_FEED"].close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client with a signed-in admin session."""
    response = client.post(
        "/admin/login",
        data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 302
    return client


def make_order(store, name="Anna Bianchi", color="Nero", size="M", qty=3):
    """Write one KANGAROO kids order straight to a store and return its id."""
    request = OrderRequest(
        product_type="Felpa KANGAROO (Bambino)",
        model_key="KANGAROO",
        variant="kids",
        color=color,
        qty=qty,
        size=size,
    )
    customer = CustomerDetails(name=name, class_name="3B", contact="anna@example.com")
    return store.create(Order.from_submission(request, customer))

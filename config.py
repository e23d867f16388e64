"""
Configuration for PreorderWeb.

Values come from the environment (optionally a .env file next to app.py).
ORDER_BACKEND selects where orders live:
    memory  - process-local store, for development and demos
    mongo   - MongoDB collection at MONGO_URI
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env early so environment variables are available for the Config class
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    SESSION_COOKIE_NAME = "preorder_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Order backend
    # ==========================================================================
    ORDER_BACKEND = os.environ.get("ORDER_BACKEND", "memory")
    MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DATABASE = os.environ.get("MONGO_DATABASE", "preorder")
    ORDERS_COLLECTION = os.environ.get("ORDERS_COLLECTION", "orders")

    # Seconds between MongoDB polls while an admin is signed in
    ORDER_FEED_POLL_SECONDS = float(os.environ.get("ORDER_FEED_POLL_SECONDS", "2"))

    # ==========================================================================
    # Admin
    # ==========================================================================
    # Generate the hash with:
    #   python -c "from werkzeug.security import generate_password_hash; print(generate_password_hash('...'))"
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "")
    ADMIN_PASSWORD_HASH = os.environ.get("ADMIN_PASSWORD_HASH", "")

    # Seconds between admin table refreshes in the browser
    ADMIN_REFRESH_SECONDS = int(os.environ.get("ADMIN_REFRESH_SECONDS", "5"))

    # ==========================================================================
    # Product images
    # ==========================================================================
    PRODUCTS_DIR = os.environ.get("PRODUCTS_DIR", str(BASE_DIR / "static" / "products"))
    MANIFEST_PATH = os.environ.get(
        "MANIFEST_PATH", str(BASE_DIR / "generated" / "products-manifest.json")
    )


class ProductionConfig(Config):
    """
    Deployed storefront.

    Orders must survive restarts, so MongoDB is the default backend and the
    admin session cookie is locked down (the admin table exposes contacts).
    """
    DEBUG = False
    ORDER_BACKEND = os.environ.get("ORDER_BACKEND", "mongo")
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    REMEMBER_COOKIE_SECURE = True
    PERMANENT_SESSION_LIFETIME = 8 * 3600  # one school day


class DevelopmentConfig(Config):
    """Local development: in-memory orders unless ORDER_BACKEND says otherwise."""
    DEBUG = True


class TestingConfig(Config):
    """Test runs: in-memory backend and a fixed admin email."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "testing-secret-key"
    ORDER_BACKEND = "memory"
    ADMIN_EMAIL = "admin@example.com"
    ADMIN_PASSWORD_HASH = ""


CONFIG_BY_ENVIRONMENT = {
    "production": ProductionConfig,
    "development": DevelopmentConfig,
    "testing": TestingConfig,
}


def get_config(environment: str = None):
    """
    Config class for an environment name (default: FLASK_ENV).

    Unknown names fall back to the base Config.
    """
    if environment is None:
        environment = os.environ.get("FLASK_ENV", "development")
    return CONFIG_BY_ENVIRONMENT.get(environment.lower(), Config)


def check_config(config) -> list:
    """
    Problems that make a configuration unsafe to serve.

    Returns:
        List of human-readable problems (empty when the config is usable)
    """
    problems = []
    if config.get("ENVIRONMENT") == "production" and config.get("SECRET_KEY") == "dev-secret-key":
        problems.append("FLASK_SECRET_KEY is not set")
    if config.get("ORDER_BACKEND") == "mongo" and not config.get("MONGO_URI"):
        problems.append("ORDER_BACKEND is 'mongo' but MONGO_URI is empty")
    return problems

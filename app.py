"""
PreorderWeb - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration and sets up logging
2. Builds the order store (in-memory or MongoDB) unless one is passed in
3. Loads the product image manifest
4. Wires the admin auth service to the live order feed
5. Registers route blueprints, context processors and error handlers

ARCHITECTURE:
    Request threads
    ├── catalog / preorder routes -> OrderService -> OrderStore
    └── admin routes -> OrderFeed (read) / OrderService (write)

    OrderWatcher thread (MongoDB backend only, while an admin is signed in)
    └── polls the orders collection and pushes the full list to OrderFeed

Backend handles are created here and handed to each component; nothing
reaches for a module-level client, so tests pass fakes to create_app().
"""

from __future__ import annotations

import atexit
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, flash, redirect, request, session, url_for
from flask_login import LoginManager

from config import check_config, get_config
from logging_config import setup_logging, get_logger
from core.auth import AdminUser, AuthService, ConfigAuthService
from core.order_store import InMemoryOrderStore, OrderStore
from models.manifest import ProductManifest
from services.order_service import OrderService
from services.order_feed import OrderFeed
from routes import register_blueprints
from modules.i18n import (
    DEFAULT_LANGUAGE,
    I18nManager,
    create_translation_filter,
    get_supported_languages,
    translate_current,
)


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


BASE_DIR = Path(__file__).parent

# Endpoints fetched by <img>/<link> tags; a miss there is a display fallback,
# not a page the user navigated to.
ASSET_ENDPOINTS = frozenset({"catalog.product_image", "static"})


def _build_order_store(config) -> OrderStore:
    """Create the order store selected by ORDER_BACKEND."""
    backend = str(config.get("ORDER_BACKEND", "memory")).lower()

    if backend == "mongo":
        from core.mongo_store import MongoOrderStore
        return MongoOrderStore.from_uri(
            config["MONGO_URI"],
            config["MONGO_DATABASE"],
            config["ORDERS_COLLECTION"],
            poll_interval_seconds=config["ORDER_FEED_POLL_SECONDS"],
        )

    if backend != "memory":
        raise ValueError(f"Unknown ORDER_BACKEND: {backend!r} (expected 'memory' or 'mongo')")

    logger.warning("Using in-memory order store - orders are lost on restart")
    return InMemoryOrderStore()


def create_app(
    config_object=None,
    order_store: Optional[OrderStore] = None,
    auth_service: Optional[AuthService] = None,
    manifest: Optional[ProductManifest] = None,
) -> Flask:
    """
    Application factory - creates and configures the Flask app.

    Args:
        config_object: Config class or import path (default: get_config() for FLASK_ENV)
        order_store: Order backend; built from ORDER_BACKEND when omitted
        auth_service: Admin auth; ConfigAuthService from ADMIN_* when omitted
        manifest: Image manifest; loaded from MANIFEST_PATH when omitted

    Returns:
        Configured Flask application
    """
    # .env next to app.py takes precedence over the shell environment
    env_file = BASE_DIR / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object or get_config())

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting PreorderWeb in {app.config.get('ENVIRONMENT')} mode")

    problems = check_config(app.config)
    for problem in problems:
        logger.warning(f"Configuration problem: {problem}")
    if problems and app.config.get("ENVIRONMENT") == "production":
        raise RuntimeError(f"Refusing to start in production: {'; '.join(problems)}")

    # =========================================================================
    # BACKEND HANDLES
    # =========================================================================

    if order_store is None:
        order_store = _build_order_store(app.config)
    if auth_service is None:
        auth_service = ConfigAuthService(
            app.config.get("ADMIN_EMAIL", ""),
            app.config.get("ADMIN_PASSWORD_HASH", ""),
        )
    if manifest is None:
        manifest = ProductManifest.load(Path(app.config["MANIFEST_PATH"]))

    order_service = OrderService(order_store)
    order_feed = OrderFeed(order_store)

    def on_admin_session_change(user: Optional[AdminUser]) -> None:
        if user is None:
            order_feed.close()
        else:
            order_feed.open()

    auth_service.add_listener(on_admin_session_change)

    app.config["ORDER_STORE"] = order_store
    app.config["ORDER_SERVICE"] = order_service
    app.config["ORDER_FEED"] = order_feed
    app.config["AUTH_SERVICE"] = auth_service
    app.config["PRODUCT_MANIFEST"] = manifest
    app.config["I18N"] = i18n = I18nManager()

    for lang in get_supported_languages():
        missing = i18n.missing_keys(lang)
        if missing:
            logger.warning(f"{len(missing)} translation key(s) missing for '{lang}': {', '.join(missing[:5])}")

    # =========================================================================
    # ADMIN SESSIONS
    # =========================================================================

    login_manager = LoginManager()
    login_manager.login_view = "admin.login"
    login_manager.login_message = None
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id: str):
        return auth_service.load_user(user_id)

    # =========================================================================
    # CLEANUP REGISTRATION
    # =========================================================================

    def cleanup():
        """Cleanup on application shutdown."""
        logger.info("Shutting down...")
        order_feed.close()
        order_store.close()
        logger.info("Shutdown complete")

    atexit.register(cleanup)

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # CONTEXT PROCESSORS
    # =========================================================================

    @app.context_processor
    def inject_i18n():
        """Inject translation function into all templates."""
        current_lang = session.get("language", DEFAULT_LANGUAGE)
        return {
            "_": create_translation_filter(app.config["I18N"], current_lang),
            "current_language": current_lang,
            "supported_languages": get_supported_languages(),
        }

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(404)
    def handle_not_found(e):
        if request.endpoint in ASSET_ENDPOINTS:
            return e
        flash(translate_current("errors.not_found"), "warning")
        return redirect(url_for("catalog.index"))

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        flash(translate_current("errors.unexpected"), "error")
        return redirect(url_for("catalog.index"))

    # =========================================================================
    # LANGUAGE ROUTE
    # =========================================================================

    @app.route("/set_language/<lang>", methods=["GET"])
    def set_language(lang: str):
        if lang in get_supported_languages():
            session["language"] = lang
            session.modified = True
        else:
            flash(translate_current("errors.unsupported_language", lang=lang), "error")
        return redirect(request.referrer or url_for("catalog.index"))

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)

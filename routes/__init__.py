"""
Flask route blueprints for PreorderWeb.

This module contains all route handlers organized by functionality:
- catalog: Product cards, card submission, product images
- preorder: Confirmation page and order submission
- admin: Admin sign-in, live order table, triage actions
- api: Health check

Each blueprint is registered with the Flask app in create_app().
"""

from .catalog import catalog_bp
from .preorder import preorder_bp
from .admin import admin_bp
from .api import api_bp

__all__ = [
    "catalog_bp",
    "preorder_bp",
    "admin_bp",
    "api_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(catalog_bp)
    app.register_blueprint(preorder_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(api_bp)

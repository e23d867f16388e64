"""
API routes.

Handles:
- /health - Health check endpoint
"""

from flask import Blueprint, current_app

from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with service status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {}
    }

    order_store = current_app.config.get("ORDER_STORE")
    if order_store is not None and order_store.ping():
        health_status["checks"]["order_store"] = "ok"
    else:
        health_status["checks"]["order_store"] = "unreachable"
        health_status["status"] = "degraded"

    manifest = current_app.config.get("PRODUCT_MANIFEST")
    if manifest is not None and not manifest.is_empty:
        health_status["checks"]["manifest"] = f"{len(manifest.entries)} entries"
    else:
        health_status["checks"]["manifest"] = "empty"
        health_status["status"] = "degraded"

    order_feed = current_app.config.get("ORDER_FEED")
    health_status["checks"]["order_feed"] = "open" if order_feed and order_feed.is_open else "closed"

    if health_status["status"] != "ok":
        logger.warning(f"Health check degraded: {health_status['checks']}")

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code

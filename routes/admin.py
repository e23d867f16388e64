"""
Admin routes.

Sign-in, the live order table and the triage actions (mark as seen,
delete one, delete all). The table reads from the OrderFeed; actions go
through the OrderService. Every failure is flashed once and the record is
left as the backend left it.
"""

from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import current_user, login_required, login_user, logout_user

from core.exceptions import (
    BatchDeleteError,
    InvalidCredentialsError,
    OrderStoreError,
)
from modules.i18n import translate_current as _t
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


def _only_new() -> bool:
    return (request.values.get("only_new") or "") == "1"


def _back_to_dashboard():
    if _only_new():
        return redirect(url_for("admin.dashboard", only_new=1))
    return redirect(url_for("admin.dashboard"))


def _refresh_feed() -> None:
    try:
        current_app.config["ORDER_FEED"].refresh()
    except OrderStoreError as e:
        logger.warning(f"Order feed refresh failed: {e}")


def _table_context() -> dict:
    """Orders and counters for the table, reopening the feed if needed."""
    order_feed = current_app.config["ORDER_FEED"]
    feed_error = None
    try:
        order_feed.ensure_open()
    except OrderStoreError as e:
        logger.error(f"Cannot open order feed: {e}")
        feed_error = _t("admin.errors.feed_unavailable")

    only_new = _only_new()
    total, new_count = order_feed.counts()
    return {
        "orders": order_feed.orders(only_new=only_new),
        "only_new": only_new,
        "total_count": total,
        "new_count": new_count,
        "feed_error": feed_error,
        "updated_at": order_feed.updated_at,
    }


@admin_bp.route("/login", methods=["GET", "POST"])
def login():
    """
    Admin sign-in.

    GET: Display the login form
    POST: Check credentials; one generic message for any failure
    """
    if current_user.is_authenticated:
        return redirect(url_for("admin.dashboard"))

    error = None
    email = ""

    if request.method == "POST":
        email = (request.form.get("email") or "").strip()
        password = request.form.get("password") or ""
        auth_service = current_app.config["AUTH_SERVICE"]

        try:
            user = auth_service.sign_in(email, password)
        except InvalidCredentialsError:
            error = _t("admin.errors.invalid_credentials")
        except OrderStoreError as e:
            logger.error(f"Admin signed in but the order feed failed to open: {e}")
            error = _t("admin.errors.feed_unavailable")
        else:
            login_user(user)
            return redirect(url_for("admin.dashboard"))

    return render_template("admin_login.html", error=error, email=email)


@admin_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    """End the admin session and close the order feed."""
    auth_service = current_app.config["AUTH_SERVICE"]
    auth_service.sign_out(current_user._get_current_object())
    logout_user()
    return redirect(url_for("admin.login"))


@admin_bp.route("/", methods=["GET"])
@login_required
def dashboard():
    """Order table page."""
    return render_template(
        "admin.html",
        refresh_seconds=current_app.config.get("ADMIN_REFRESH_SECONDS", 5),
        **_table_context(),
    )


@admin_bp.route("/orders/table", methods=["GET"])
@login_required
def orders_table():
    """
    Table partial for the periodic refresh.

    The browser swaps the whole table body with this response.
    """
    return render_template("_orders_table.html", **_table_context())


@admin_bp.route("/orders/<order_id>/seen", methods=["POST"])
@login_required
def mark_seen(order_id: str):
    """Move one order from new to seen."""
    order_service = current_app.config["ORDER_SERVICE"]
    try:
        order_service.mark_seen(order_id)
    except OrderStoreError as e:
        logger.error(f"Mark as seen failed for {order_id}: {e}")
        flash(_t("admin.errors.update_failed"), "error")
    else:
        _refresh_feed()
    return _back_to_dashboard()


@admin_bp.route("/orders/<order_id>/delete", methods=["POST"])
@login_required
def delete_order(order_id: str):
    """Delete one order (the browser asks for confirmation first)."""
    order_service = current_app.config["ORDER_SERVICE"]
    try:
        order_service.delete_order(order_id)
    except OrderStoreError as e:
        logger.error(f"Delete failed for {order_id}: {e}")
        flash(_t("admin.errors.delete_failed"), "error")
    else:
        _refresh_feed()
        flash(_t("admin.deleted_one"), "success")
    return _back_to_dashboard()


@admin_bp.route("/orders/delete-all", methods=["POST"])
@login_required
def delete_all():
    """Delete every order in backend-sized batches (confirmed in the browser)."""
    order_service = current_app.config["ORDER_SERVICE"]
    try:
        deleted = order_service.delete_all_orders()
    except BatchDeleteError as e:
        flash(_t("admin.errors.delete_all_partial", deleted=e.deleted, total=e.total), "error")
    except OrderStoreError as e:
        logger.error(f"Delete all failed: {e}")
        flash(_t("admin.errors.delete_all_failed"), "error")
    else:
        if deleted:
            flash(_t("admin.deleted_all", count=deleted), "success")
        else:
            flash(_t("admin.nothing_to_delete"), "info")
    _refresh_feed()
    return _back_to_dashboard()

"""
Preorder confirmation route.

Reads the product selection from the query string, collects the customer
fields and writes one order. Three terminal-ish states:

    missing data  - required query parameters absent; link back, no form
    form          - summary + customer form (with inline error on failure)
    received      - order written
"""

from flask import (
    Blueprint,
    current_app,
    render_template,
    request,
    url_for,
)

from core.exceptions import OrderStoreError, OrderValidationError
from models.order import CustomerDetails, OrderRequest
from modules.catalog import find_product
from modules.i18n import translate_current as _t
from modules.image_resolver import resolve_image
from modules.sanitize import sanitize_text
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

preorder_bp = Blueprint("preorder", __name__)

# Constants
MAX_FIELD_LENGTH = 200
MAX_NOTES_LENGTH = 1000


def _customer_from_form(form) -> CustomerDetails:
    return CustomerDetails(
        name=sanitize_text(form.get("name", ""), max_length=MAX_FIELD_LENGTH),
        class_name=sanitize_text(form.get("className", ""), max_length=MAX_FIELD_LENGTH),
        contact=sanitize_text(form.get("contact", ""), max_length=MAX_FIELD_LENGTH),
        notes=sanitize_text(form.get("notes", ""), max_length=MAX_NOTES_LENGTH),
    )


@preorder_bp.route("/preorder", methods=["GET", "POST"])
def preorder():
    """
    Handle the confirmation page.

    GET: Show the order summary and the customer form
    POST: Validate and write the order
    """
    order_request = OrderRequest.from_query(request.args)
    if order_request is None:
        logger.info("Preorder page opened without complete product data")
        return render_template("preorder_missing.html")

    product = find_product(order_request.model_key, order_request.variant)
    image = None
    if product is not None:
        image = resolve_image(product, order_request.color, current_app.config["PRODUCT_MANIFEST"])

    customer = CustomerDetails()
    error = None

    if request.method == "POST":
        customer = _customer_from_form(request.form)
        order_service = current_app.config["ORDER_SERVICE"]

        try:
            order = order_service.submit_order(order_request, customer)
        except OrderValidationError as e:
            logger.debug(f"Preorder form incomplete: {e.missing_fields}")
            error = _t("preorder.errors.required")
        except OrderStoreError as e:
            logger.error(f"Failed to save order: {e}", exc_info=True)
            error = _t("preorder.errors.save_failed")
        else:
            return render_template("preorder_done.html", order=order)

    return render_template(
        "preorder.html",
        order_request=order_request,
        product=product,
        image=image,
        customer=customer,
        error=error,
        form_action=url_for("preorder.preorder", **order_request.to_query_params()),
    )

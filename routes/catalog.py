"""
Catalog routes.

Renders the product cards and turns a card submission into the
confirmation page URL. Product images are served from PRODUCTS_DIR under
/products/, matching the paths written into the manifest.
"""

from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    send_from_directory,
    url_for,
)

from models.order import MAX_QUANTITY, MIN_QUANTITY, OrderRequest, clamp_quantity
from models.product import Product
from modules.catalog import SIZE_GUIDE, find_product, get_products
from modules.i18n import translate_current as _t
from modules.image_resolver import UNAVAILABLE_IMAGE, resolve_product_images
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

catalog_bp = Blueprint("catalog", __name__)


def build_card(product: Product, manifest) -> dict:
    """Template context for one product card."""
    images = resolve_product_images(product, manifest)
    return {
        "product": product,
        "image": images[product.default_color],
        "images": {color: image.to_dict() for color, image in images.items()},
    }


def build_order_request(product: Product, form) -> OrderRequest:
    """
    Build the confirmation request from a card form.

    Unknown colors or sizes fall back to the product defaults; quantity is
    clamped to [1, 10].
    """
    color = form.get("color", "")
    if color not in product.colors:
        color = product.default_color

    size = None
    if product.has_sizes:
        size = form.get("size", "")
        if size not in product.sizes:
            size = product.default_size

    return OrderRequest(
        product_type=product.name,
        model_key=product.model_key,
        variant=product.variant,
        color=color,
        qty=clamp_quantity(form.get("qty")),
        size=size,
    )


@catalog_bp.route("/", methods=["GET"])
def index():
    """Product catalog with one order card per product."""
    manifest = current_app.config["PRODUCT_MANIFEST"]
    cards = [build_card(product, manifest) for product in get_products()]
    return render_template(
        "catalog.html",
        cards=cards,
        size_guide=SIZE_GUIDE,
        unavailable_image=UNAVAILABLE_IMAGE,
        min_qty=MIN_QUANTITY,
        max_qty=MAX_QUANTITY,
    )


@catalog_bp.route("/order", methods=["POST"])
def order():
    """Redirect a card submission to the confirmation page."""
    product = find_product(
        request.form.get("modelKey", ""),
        request.form.get("variant", ""),
    )
    if product is None:
        logger.warning(
            f"Order form for unknown product: modelKey={request.form.get('modelKey')!r} "
            f"variant={request.form.get('variant')!r}"
        )
        flash(_t("catalog.errors.unknown_product"), "error")
        return redirect(url_for("catalog.index"))

    order_request = build_order_request(product, request.form)
    logger.debug(f"Card submitted: {order_request.to_query()}")
    return redirect(
        url_for("preorder.preorder", **order_request.to_query_params()),
        code=303,
    )


@catalog_bp.route("/products/<path:filename>", methods=["GET"])
def product_image(filename: str):
    """Serve a product image or placeholder."""
    return send_from_directory(current_app.config["PRODUCTS_DIR"], filename)

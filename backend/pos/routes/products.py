# Overview: Flask API routes for products operations; parses input and returns JSON responses.

# backend/pos/routes/products.py
"""
Product management routes.

Products reference a category by `categoryId`; an unknown category is a 404.
"""
from flask import Blueprint, request, jsonify

from ..services import products_service
from ..models import Product
from ..validation import (
    ModelValidationPolicy,
    ValidationError,
    validate_payload,
    enforce_rules_product,
)
from ..decorators import require_int_ids

PRODUCT_POLICY = ModelValidationPolicy(
    fields={
        "name": "name",
        "image": "image",
        "price": "price",
        "inventory": "inventory",
        "categoryId": "category_id",
    },
    required_on_create={"name", "price", "inventory", "categoryId"},
)

products_bp = Blueprint("products", __name__, url_prefix="/products")


def _int_query_arg(name: str) -> int | None:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    if not raw.isdigit():
        raise ValidationError(f"The {name} must be a number")
    return int(raw)


@products_bp.get("")
def list_products_route():
    """
    List products, newest first.

    Query params:
    - category_id: int (optional) - filter by category
    - take: int (optional) - page size (default PRODUCTS_PAGE_SIZE)
    - skip: int (optional) - rows to skip
    """
    category_id = _int_query_arg("category_id")
    take = _int_query_arg("take")
    skip = _int_query_arg("skip")

    result = products_service.list_products(category_id=category_id, take=take, skip=skip)
    return jsonify(result), 200


@products_bp.post("")
def create_product_route():
    payload = request.get_json(silent=True) or {}

    patch = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY, partial=False)
    enforce_rules_product(patch)

    created = products_service.create_product(patch)
    return jsonify(created.to_dict()), 201


@products_bp.get("/<product_id>")
@require_int_ids
def get_product_route(product_id: int):
    product = products_service.get_product(product_id)
    return jsonify(product.to_dict()), 200


@products_bp.patch("/<product_id>")
@require_int_ids
def update_product_route(product_id: int):
    payload = request.get_json(silent=True) or {}

    patch = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY, partial=True)
    enforce_rules_product(patch)

    updated = products_service.update_product(product_id, patch)
    return jsonify(updated.to_dict()), 200


@products_bp.delete("/<product_id>")
@require_int_ids
def delete_product_route(product_id: int):
    message = products_service.delete_product(product_id)
    return message, 200, {"Content-Type": "text/plain; charset=utf-8"}

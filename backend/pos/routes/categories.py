# Overview: Flask API routes for categories; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..services import category_service
from ..models import Category
from ..validation import ModelValidationPolicy, validate_payload
from ..decorators import require_int_ids

CATEGORY_POLICY = ModelValidationPolicy(
    fields={"name": "name"},
    required_on_create={"name"},
)

categories_bp = Blueprint("categories", __name__, url_prefix="/categories")


@categories_bp.post("")
def create_category_route():
    payload = request.get_json(silent=True) or {}
    patch = validate_payload(model=Category, payload=payload, policy=CATEGORY_POLICY, partial=False)
    category = category_service.create_category(patch)
    return jsonify(category.to_dict()), 201


@categories_bp.get("")
def list_categories_route():
    return jsonify([c.to_dict() for c in category_service.list_categories()]), 200


@categories_bp.get("/<category_id>")
@require_int_ids
def get_category_route(category_id: int):
    """
    Get one category.

    Query params:
    - products: "true" to embed the category's products
    """
    with_products = request.args.get("products", "").lower() == "true"
    category = category_service.get_category(category_id)
    return jsonify(category.to_dict(with_products=with_products)), 200


@categories_bp.patch("/<category_id>")
@require_int_ids
def update_category_route(category_id: int):
    payload = request.get_json(silent=True) or {}
    patch = validate_payload(model=Category, payload=payload, policy=CATEGORY_POLICY, partial=True)
    category = category_service.update_category(category_id, patch)
    return jsonify(category.to_dict()), 200


@categories_bp.delete("/<category_id>")
@require_int_ids
def delete_category_route(category_id: int):
    message = category_service.delete_category(category_id)
    return message, 200, {"Content-Type": "text/plain; charset=utf-8"}

# Overview: Flask API routes for coupons; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..services import coupon_service
from ..models import Coupon
from ..validation import (
    ModelValidationPolicy,
    ValidationError,
    validate_payload,
    enforce_rules_coupon,
)
from ..decorators import require_int_ids

COUPON_POLICY = ModelValidationPolicy(
    fields={
        "name": "name",
        "percentage": "percentage",
        "expirationDate": "expiration_date",
    },
    required_on_create={"name", "percentage", "expirationDate"},
    labels={"expirationDate": "date"},
)

coupons_bp = Blueprint("coupons", __name__, url_prefix="/coupons")


@coupons_bp.post("")
def create_coupon_route():
    payload = request.get_json(silent=True) or {}
    patch = validate_payload(model=Coupon, payload=payload, policy=COUPON_POLICY, partial=False)
    enforce_rules_coupon(patch)
    coupon = coupon_service.create_coupon(patch)
    return jsonify(coupon.to_dict()), 201


@coupons_bp.get("")
def list_coupons_route():
    return jsonify([c.to_dict() for c in coupon_service.list_coupons()]), 200


@coupons_bp.post("/apply-coupon")
def apply_coupon_route():
    """
    Check a coupon at checkout.

    Body: {"name": str}
    Returns 200 {"message": "Valid coupon", ...coupon}; 404 unknown; 422 expired.
    """
    payload = request.get_json(silent=True) or {}
    name = payload.get("name")
    if name is None or (isinstance(name, str) and not name.strip()):
        raise ValidationError("The name is required")
    if not isinstance(name, str):
        raise ValidationError("Invalid name")

    coupon = coupon_service.apply_coupon(name.strip())
    return jsonify({"message": "Valid coupon", **coupon.to_dict()}), 200


@coupons_bp.get("/<coupon_id>")
@require_int_ids
def get_coupon_route(coupon_id: int):
    return jsonify(coupon_service.get_coupon(coupon_id).to_dict()), 200


@coupons_bp.patch("/<coupon_id>")
@require_int_ids
def update_coupon_route(coupon_id: int):
    payload = request.get_json(silent=True) or {}
    patch = validate_payload(model=Coupon, payload=payload, policy=COUPON_POLICY, partial=True)
    enforce_rules_coupon(patch)
    coupon = coupon_service.update_coupon(coupon_id, patch)
    return jsonify(coupon.to_dict()), 200


@coupons_bp.delete("/<coupon_id>")
@require_int_ids
def delete_coupon_route(coupon_id: int):
    return jsonify(coupon_service.delete_coupon(coupon_id)), 200

# Overview: Flask API routes for sales transactions; parses input and returns JSON responses.

# backend/pos/routes/transactions.py
"""Transactions API routes"""

from flask import Blueprint, request, jsonify

from ..services import transaction_service
from ..validation import validate_transaction_payload
from ..decorators import require_int_ids


transactions_bp = Blueprint("transactions", __name__, url_prefix="/transactions")


@transactions_bp.post("")
def create_transaction_route():
    """
    Store a sale and decrement inventory.

    Body: {"total": number, "coupon": str?, "contents": [{"productId", "quantity", "price"}]}
    Returns 201 with the plain-text confirmation.
    """
    payload = validate_transaction_payload(request.get_json(silent=True))
    message = transaction_service.create_transaction(payload)
    return message, 201, {"Content-Type": "text/plain; charset=utf-8"}


@transactions_bp.get("")
def list_transactions_route():
    """
    List transactions with contents.

    Query params:
    - transactionDate: YYYY-MM-DD (optional) - only sales made that day
    """
    transaction_date = request.args.get("transactionDate")
    transactions = transaction_service.find_all(transaction_date)
    return jsonify([t.to_dict() for t in transactions]), 200


@transactions_bp.get("/<transaction_id>")
@require_int_ids
def get_transaction_route(transaction_id: int):
    transaction = transaction_service.find_one(transaction_id)
    return jsonify(transaction.to_dict()), 200


@transactions_bp.delete("/<transaction_id>")
@require_int_ids
def delete_transaction_route(transaction_id: int):
    """Reverse a sale: restores inventory and deletes the transaction."""
    result = transaction_service.remove_transaction(transaction_id)
    return jsonify(result), 200

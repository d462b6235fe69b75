# Overview: Service-layer operations for product stock; reserve on sale, release on reversal.

# backend/pos/services/inventory_service.py
"""
Inventory invariants

- Product.inventory is the stock on hand and is never negative once committed.
- reserve() and release() only mutate the product inside the caller's
  session; persistence happens when the caller's unit of work commits, so a
  rollback undoes them together with everything else.
"""

from __future__ import annotations

from ..extensions import db
from ..errors import BadRequestError
from ..models import Product


def reserve(product: Product, quantity: int) -> Product:
    """Take `quantity` units out of stock or fail naming the product."""
    if quantity > product.inventory:
        raise BadRequestError([f"The product {product.name} exced the enable quantity"])
    product.inventory -= quantity
    return product


def release(product_id: int | None, quantity: int) -> Product | None:
    """
    Put `quantity` units back into stock.

    Best-effort: returns None when the product no longer exists.
    """
    if product_id is None:
        return None
    product = db.session.get(Product, product_id)
    if product is None:
        return None
    product.inventory += quantity
    return product

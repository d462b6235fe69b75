# backend/pos/services/products_service.py
"""
Products service.

Products always belong to an existing category; a category reference that
does not resolve is a 404 so clients can tell it apart from a bad payload.
"""
from __future__ import annotations

from flask import current_app

from ..extensions import db
from ..errors import NotFoundError
from ..models import Category, Product

PRODUCT_MUTABLE_FIELDS = {"name", "image", "price", "inventory", "category_id"}


def apply_product_patch(p: Product, patch: dict) -> None:
    for k, v in patch.items():
        if k not in PRODUCT_MUTABLE_FIELDS:
            continue
        setattr(p, k, v)


def _require_category(category_id: int) -> Category:
    category = db.session.get(Category, category_id)
    if category is None:
        raise NotFoundError([f"The category with ID {category_id} does not found"])
    return category


def list_products(
    category_id: int | None = None,
    take: int | None = None,
    skip: int | None = None,
) -> dict:
    """
    Newest-first product listing with optional category filter.

    Returns:
        {"total": <matching rows>, "products": [<page of rows>]}
    """
    take = take if take is not None else current_app.config.get("PRODUCTS_PAGE_SIZE", 10)
    skip = skip or 0

    base_query = db.session.query(Product)
    if category_id:
        base_query = base_query.filter(Product.category_id == category_id)

    total = base_query.count()
    products = base_query.order_by(Product.id.desc()).offset(skip).limit(take).all()

    return {
        "total": total,
        "products": [p.to_dict() for p in products],
    }


def get_product(product_id: int) -> Product:
    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFoundError([f"The product with ID {product_id} does not found"])
    return product


def create_product(patch: dict) -> Product:
    """Create product using a validated patch dict (category must exist)."""
    _require_category(patch["category_id"])

    p = Product()
    apply_product_patch(p, patch)

    db.session.add(p)
    db.session.commit()
    return p


def update_product(product_id: int, patch: dict) -> Product:
    product = get_product(product_id)
    if patch.get("category_id") is not None:
        _require_category(patch["category_id"])

    apply_product_patch(product, patch)
    db.session.commit()
    return product


def delete_product(product_id: int) -> str:
    product = get_product(product_id)
    db.session.delete(product)
    db.session.commit()
    return f"The Product with ID {product_id} was removed"

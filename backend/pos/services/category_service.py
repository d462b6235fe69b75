# Overview: Service-layer operations for categories.

from __future__ import annotations

from ..extensions import db
from ..errors import NotFoundError
from ..models import Category


def list_categories() -> list[Category]:
    return db.session.query(Category).order_by(Category.id.asc()).all()


def get_category(category_id: int) -> Category:
    category = db.session.get(Category, category_id)
    if category is None:
        raise NotFoundError(f"The Category with ID {category_id} does not found")
    return category


def create_category(patch: dict) -> Category:
    category = Category(name=patch["name"])
    db.session.add(category)
    db.session.commit()
    return category


def update_category(category_id: int, patch: dict) -> Category:
    category = get_category(category_id)
    if "name" in patch:
        category.name = patch["name"]
    db.session.commit()
    return category


def delete_category(category_id: int) -> str:
    """Delete a category together with its products."""
    category = get_category(category_id)
    db.session.delete(category)
    db.session.commit()
    return f"The Category with ID {category_id} was removed"

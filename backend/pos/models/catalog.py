from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


DEFAULT_PRODUCT_IMAGE = "default.svg"


class Category(db.Model):
    """Product grouping shown in the storefront menu."""
    __tablename__ = "categories"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(60), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    products = db.relationship(
        "Product",
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="Product.id",
    )

    def __repr__(self) -> str:
        return f"<Category id={self.id} name={self.name!r}>"

    def to_dict(self, with_products: bool = False) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
        }
        if with_products:
            data["products"] = [p.to_dict(with_category=False) for p in self.products]
        return data


class Product(db.Model):
    """
    Product master data.

    INVENTORY: `inventory` is the stock count on hand. It is decremented when a
    transaction is created and restored when a transaction is removed; it must
    never be negative in a committed state.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.CheckConstraint("inventory >= 0", name="ck_products_inventory_non_negative"),
        db.Index("ix_products_category_name", "category_id", "name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(60), nullable=False)
    image = db.Column(db.String(120), nullable=True, default=DEFAULT_PRODUCT_IMAGE)

    price = db.Column(db.Numeric(10, 2), nullable=False)
    inventory = db.Column(db.Integer, nullable=False, default=0)

    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=False, index=True)

    version_id = db.Column(db.Integer, nullable=False, default=1)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    category = db.relationship("Category", back_populates="products")
    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} inventory={self.inventory}>"

    def to_dict(self, with_category: bool = True) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "price": float(self.price) if self.price is not None else None,
            "inventory": self.inventory,
            "categoryId": self.category_id,
            "updatedAt": to_utc_z(self.updated_at),
        }
        if with_category and self.category is not None:
            data["category"] = self.category.to_dict()
        return data

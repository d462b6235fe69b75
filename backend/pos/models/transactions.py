from __future__ import annotations

from ..extensions import db
from ..time_utils import utcnow, to_utc_z


class Transaction(db.Model):
    """
    Completed sale.

    Created atomically with its contents and never edited afterwards; the only
    later change is removal, which restores the sold inventory.
    """
    __tablename__ = "transactions"
    __table_args__ = (
        db.Index("ix_transactions_transaction_date", "transaction_date"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    # Post-discount amount
    total = db.Column(db.Numeric(10, 2), nullable=False)
    coupon = db.Column(db.String(30), nullable=True)
    discount = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    transaction_date = db.Column(db.DateTime, nullable=False, default=utcnow)

    contents = db.relationship(
        "TransactionContents",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionContents.id",
    )

    def __repr__(self) -> str:
        return f"<Transaction id={self.id} total={self.total} coupon={self.coupon!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "total": float(self.total) if self.total is not None else None,
            "coupon": self.coupon,
            "discount": float(self.discount) if self.discount is not None else 0,
            "transactionDate": to_utc_z(self.transaction_date),
            "contents": [c.to_dict() for c in self.contents],
        }


class TransactionContents(db.Model):
    """Line item: product, quantity and the unit price charged at sale time."""
    __tablename__ = "transaction_contents"
    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_transaction_contents_quantity_positive"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    transaction_id = db.Column(db.Integer, db.ForeignKey("transactions.id"), nullable=False, index=True)
    # Cleared when the product is deleted; the sale keeps its lines and prices
    product_id = db.Column(
        db.Integer, db.ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True
    )

    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)

    transaction = db.relationship("Transaction", back_populates="contents")
    product = db.relationship("Product")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "productId": self.product_id,
            "quantity": self.quantity,
            "price": float(self.price) if self.price is not None else None,
            "product": self.product.to_dict(with_category=False) if self.product else None,
        }

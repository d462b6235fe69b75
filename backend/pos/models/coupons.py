from __future__ import annotations

from ..extensions import db


class Coupon(db.Model):
    """
    Percentage discount code applied to a whole transaction.

    A coupon is valid through the END of its expiration day.
    """
    __tablename__ = "coupons"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(30), nullable=False, unique=True)
    percentage = db.Column(db.Integer, nullable=False)  # 1..100
    expiration_date = db.Column(db.Date, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "percentage": self.percentage,
            "expirationDate": self.expiration_date.isoformat() if self.expiration_date else None,
        }

# Overview: Service-layer operations for coupons, including validity checks at checkout.

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..errors import ConflictError, NotFoundError, UnprocessableError
from ..models import Coupon
from ..time_utils import end_of_day, utcnow

COUPON_MUTABLE_FIELDS = {"name", "percentage", "expiration_date"}


def apply_coupon_patch(c: Coupon, patch: dict) -> None:
    for k, v in patch.items():
        if k not in COUPON_MUTABLE_FIELDS:
            continue
        setattr(c, k, v)


def _commit_unique_name(name: str | None) -> None:
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(f"The coupon with name: {name} already exists")


def list_coupons() -> list[Coupon]:
    return db.session.query(Coupon).order_by(Coupon.id.asc()).all()


def get_coupon(coupon_id: int) -> Coupon:
    coupon = db.session.get(Coupon, coupon_id)
    if coupon is None:
        raise NotFoundError(f"The coupon with ID: {coupon_id} does not found")
    return coupon


def create_coupon(patch: dict) -> Coupon:
    coupon = Coupon()
    apply_coupon_patch(coupon, patch)
    db.session.add(coupon)
    _commit_unique_name(coupon.name)
    return coupon


def update_coupon(coupon_id: int, patch: dict) -> Coupon:
    coupon = get_coupon(coupon_id)
    apply_coupon_patch(coupon, patch)
    _commit_unique_name(coupon.name)
    return coupon


def delete_coupon(coupon_id: int) -> dict:
    coupon = get_coupon(coupon_id)
    db.session.delete(coupon)
    db.session.commit()
    return {"message": "Removed coupon"}


def is_expired(coupon: Coupon, now=None) -> bool:
    """A coupon stays valid until the end of its expiration day."""
    now = now or utcnow()
    return now > end_of_day(coupon.expiration_date)


def apply_coupon(name: str) -> Coupon:
    """
    Resolve a coupon for checkout.

    Raises:
        NotFoundError: no coupon with that name
        UnprocessableError: the coupon expired
    """
    coupon = db.session.query(Coupon).filter_by(name=name).first()
    if coupon is None:
        raise NotFoundError(f"The coupon with name: {name} does not found")

    if is_expired(coupon):
        raise UnprocessableError("Expired coupon")

    return coupon

# Overview: Pytest coverage for coupon lookup, expiry and CRUD.

from datetime import datetime, timedelta

import pytest

from pos.errors import ConflictError, NotFoundError, UnprocessableError
from pos.models import Coupon
from pos.services import coupon_service
from pos.time_utils import utcnow


class TestApplyCoupon:
    """Checkout-time coupon validation."""

    def test_valid_coupon_returns_record(self, db_session, coupon_navidad):
        coupon = coupon_service.apply_coupon("navidad")
        assert coupon.id == coupon_navidad.id
        assert coupon.percentage == 20

    def test_unknown_coupon_is_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc:
            coupon_service.apply_coupon("nope")
        assert exc.value.message == "The coupon with name: nope does not found"

    def test_expired_coupon_is_unprocessable(self, db_session, coupon_expired):
        with pytest.raises(UnprocessableError) as exc:
            coupon_service.apply_coupon("vencido")
        assert exc.value.message == "Expired coupon"

    def test_coupon_expiring_today_is_still_valid(self, db_session):
        db_session.add(Coupon(name="hoy", percentage=5, expiration_date=utcnow().date()))
        db_session.commit()

        assert coupon_service.apply_coupon("hoy").name == "hoy"

    def test_expiry_boundary_is_end_of_day(self, db_session):
        coupon = Coupon(name="limite", percentage=5, expiration_date=datetime(2025, 1, 31).date())

        assert not coupon_service.is_expired(coupon, now=datetime(2025, 1, 31, 23, 59, 59, 999999))
        assert coupon_service.is_expired(coupon, now=datetime(2025, 2, 1, 0, 0, 0))

    def test_apply_has_no_side_effects(self, db_session, coupon_navidad):
        coupon_service.apply_coupon("navidad")
        db_session.expire_all()
        assert db_session.query(Coupon).count() == 1
        assert db_session.get(Coupon, coupon_navidad.id).percentage == 20


class TestCouponCrud:
    def test_create_and_get(self, db_session):
        created = coupon_service.create_coupon({
            "name": "VERANO",
            "percentage": 15,
            "expiration_date": utcnow().date() + timedelta(days=10),
        })
        assert coupon_service.get_coupon(created.id).name == "VERANO"

    def test_duplicate_name_conflicts(self, db_session, coupon_navidad):
        with pytest.raises(ConflictError):
            coupon_service.create_coupon({
                "name": "navidad",
                "percentage": 50,
                "expiration_date": utcnow().date(),
            })

    def test_get_missing_coupon(self, db_session):
        with pytest.raises(NotFoundError) as exc:
            coupon_service.get_coupon(999)
        assert exc.value.message == "The coupon with ID: 999 does not found"

    def test_update_and_delete(self, db_session, coupon_navidad):
        updated = coupon_service.update_coupon(coupon_navidad.id, {"percentage": 30})
        assert updated.percentage == 30

        assert coupon_service.delete_coupon(coupon_navidad.id) == {"message": "Removed coupon"}
        assert db_session.query(Coupon).count() == 0

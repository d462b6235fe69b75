# Overview: Pytest coverage for the catalog seed command.

from datetime import timedelta

from pos.models import Category, Coupon, Product
from pos.time_utils import utcnow


class TestSeedCommand:
    def test_seed_loads_catalog(self, app, db_session):
        result = app.test_cli_runner().invoke(args=["catalog", "seed"])

        assert result.exit_code == 0, result.output
        assert db_session.query(Category).count() == 5
        assert db_session.query(Product).count() == 8

    def test_coupon_expiry_counts_utc_days(self, app, db_session):
        app.test_cli_runner().invoke(args=["catalog", "seed"])

        coupon = db_session.query(Coupon).filter_by(name="NAVIDAD").one()
        assert coupon.expiration_date == utcnow().date() + timedelta(days=30)

    def test_seed_skips_existing_catalog(self, app, db_session, category):
        result = app.test_cli_runner().invoke(args=["catalog", "seed"])

        assert "skipping seed" in result.output
        assert db_session.query(Product).count() == 0

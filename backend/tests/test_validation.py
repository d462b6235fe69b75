# Overview: Pytest coverage for payload validation and time helpers.

from datetime import date, datetime
from decimal import Decimal

import pytest

from pos.decorators import parse_id
from pos.errors import BadRequestError
from pos.models import Product
from pos.routes.products import PRODUCT_POLICY
from pos.time_utils import end_of_day, parse_iso_date, start_of_day, to_utc_z
from pos.validation import ValidationError, validate_payload, validate_transaction_payload


class TestTransactionPayload:
    def test_normalizes_valid_payload(self):
        cleaned = validate_transaction_payload({
            "total": 1200,
            "coupon": " navidad ",
            "contents": [
                {"productId": 1, "quantity": 2, "price": 100},
                {"productId": "2", "quantity": 10, "price": "99.50"},
            ],
        })

        assert cleaned["total"] == Decimal("1200")
        assert cleaned["coupon"] == "navidad"
        assert cleaned["contents"] == [
            {"product_id": 1, "quantity": 2, "price": Decimal("100")},
            {"product_id": 2, "quantity": 10, "price": Decimal("99.50")},
        ]

    def test_blank_coupon_means_no_coupon(self):
        cleaned = validate_transaction_payload({
            "total": 1,
            "coupon": "",
            "contents": [{"productId": 1, "quantity": 1, "price": 1}],
        })
        assert cleaned["coupon"] is None

    def test_collects_all_errors(self):
        with pytest.raises(ValidationError) as exc:
            validate_transaction_payload({
                "total": "lots",
                "contents": [
                    {"productId": 1.5, "quantity": True, "price": 1},
                    {"quantity": 1, "price": -3},
                ],
                "extra": 1,
            })

        assert exc.value.message == [
            "Field not allowed: extra",
            "Invalid total",
            "contents[0]: invalid productId",
            "contents[0]: invalid quantity",
            "contents[1]: the productId can't be empty",
            "contents[1]: the price must be >= 0",
        ]
        assert isinstance(exc.value, BadRequestError)

    def test_rejects_non_object(self):
        with pytest.raises(ValidationError):
            validate_transaction_payload(["not", "a", "dict"])

    def test_rounds_amounts_to_cents(self):
        cleaned = validate_transaction_payload({
            "total": 59.699999999999996,
            "contents": [
                {"productId": 1, "quantity": 3, "price": 19.9},
                {"productId": 2, "quantity": 1, "price": "1.995"},
            ],
        })

        assert cleaned["total"] == Decimal("59.70")
        assert cleaned["contents"][0]["price"] == Decimal("19.90")
        assert cleaned["contents"][1]["price"] == Decimal("2.00")

    def test_rejects_non_finite_total(self):
        with pytest.raises(ValidationError) as exc:
            validate_transaction_payload({
                "total": "NaN",
                "contents": [{"productId": 1, "quantity": 1, "price": 1}],
            })
        assert exc.value.message == ["Invalid total"]


class TestModelPayload:
    def test_partial_patch_keeps_only_given_fields(self):
        patch = validate_payload(
            model=Product, payload={"price": "12.50"}, policy=PRODUCT_POLICY, partial=True,
        )
        assert patch == {"price": Decimal("12.50")}

    def test_maps_api_names_to_columns(self):
        patch = validate_payload(
            model=Product,
            payload={"name": " Dona ", "price": 5, "inventory": "3", "categoryId": 1},
            policy=PRODUCT_POLICY,
            partial=False,
        )
        assert patch == {"name": "Dona", "price": Decimal("5"), "inventory": 3, "category_id": 1}

    def test_max_length(self):
        with pytest.raises(ValidationError) as exc:
            validate_payload(model=Product, payload={"name": "x" * 61}, policy=PRODUCT_POLICY, partial=True)
        assert exc.value.message == ["The name exceeds max length 60"]


class TestParseId:
    @pytest.mark.parametrize("value,expected", [("1", 1), ("42", 42), (7, 7)])
    def test_valid(self, value, expected):
        assert parse_id(value) == expected

    @pytest.mark.parametrize("value", ["abc", "1.5", "", "1e3", None])
    def test_invalid(self, value):
        with pytest.raises(BadRequestError) as exc:
            parse_id(value)
        assert exc.value.message == "Invalid ID"


class TestTimeUtils:
    def test_parse_iso_date(self):
        assert parse_iso_date("2025-01-31") == date(2025, 1, 31)
        assert parse_iso_date("2025-01-31T10:00:00Z") == date(2025, 1, 31)
        assert parse_iso_date("2025-02-30") is None
        assert parse_iso_date("") is None

    def test_day_bounds(self):
        assert start_of_day(date(2025, 1, 31)) == datetime(2025, 1, 31, 0, 0, 0)
        assert end_of_day(datetime(2025, 1, 31, 8, 30)) == datetime(2025, 1, 31, 23, 59, 59, 999999)

    def test_to_utc_z(self):
        assert to_utc_z(datetime(2025, 1, 31, 12, 0, 0, 500)) == "2025-01-31T12:00:00Z"
        assert to_utc_z(None) is None

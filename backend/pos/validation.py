from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from sqlalchemy import Date, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeMeta

from .errors import BadRequestError
from .time_utils import parse_iso_date


# Maximum price: 99,999,999.99 (Numeric(10, 2))
MAX_PRICE = Decimal("99999999.99")

CENTS = Decimal("0.01")


class ValidationError(BadRequestError):
    """400-level input problem; message is the list of every violated rule."""

    def __init__(self, messages: str | list[str]):
        if isinstance(messages, str):
            messages = [messages]
        super().__init__(list(messages))


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - fields: API field name -> model column key (the security boundary;
      anything else in the payload is rejected)
    - required_on_create: API fields required for POST
    - labels: API field -> human label used in messages (defaults to the field name)
    """
    fields: dict[str, str]
    required_on_create: set[str] = field(default_factory=set)
    labels: dict[str, str] = field(default_factory=dict)

    def label(self, api_field: str) -> str:
        return self.labels.get(api_field, api_field)


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def coerce_int(value: Any) -> int:
    """Strict integer: rejects bools, floats with fractions and free text."""
    if isinstance(value, bool):
        raise ValueError("bool is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        stripped = value.strip()
        # Plain digits only (with optional leading minus); no "1e3", no "12.5"
        if stripped.lstrip("-").isdigit():
            return int(stripped)
    raise ValueError(f"{value!r} is not an integer")


def coerce_decimal(value: Any, places: int | None = 2) -> Decimal:
    """Finite number; `places=None` accepts any precision."""
    if isinstance(value, bool):
        raise ValueError("bool is not a number")
    if _is_number(value):
        dec = Decimal(str(value))
    elif isinstance(value, str) and value.strip():
        try:
            dec = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"{value!r} is not a number")
    else:
        raise ValueError(f"{value!r} is not a number")
    if not dec.is_finite():
        raise ValueError("number must be finite")
    if places is not None and -dec.as_tuple().exponent > places:
        raise ValueError(f"at most {places} decimal places")
    return dec


def to_cents(value: Any) -> Decimal:
    """Any finite number, rounded half-up to cents (59.699999999999996 -> 59.70)."""
    dec = coerce_decimal(value, places=None)
    try:
        return dec.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"{value!r} is out of range")


def _coerce_value(col, value: Any):
    coltype = col.type

    if isinstance(coltype, Integer):
        return coerce_int(value)

    if isinstance(coltype, Numeric):
        return coerce_decimal(value, places=coltype.scale or 0)

    if isinstance(coltype, Date):
        if not isinstance(value, str):
            raise ValueError("date must be an ISO-8601 string")
        parsed = parse_iso_date(value)
        if parsed is None:
            raise ValueError("invalid date")
        return parsed

    if isinstance(coltype, (String, Text)):
        if not isinstance(value, str):
            raise ValueError("expected a string")
        return value.strip()

    # Default: leave as-is
    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: Any,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - SQLAlchemy column metadata (nullable, type, String length)
    - a policy allowlist (fields)
    - required_on_create (if partial=False)
    Returns a cleaned patch dict keyed by model column key.

    Every problem found is collected; a single ValidationError carries them all.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    errors: list[str] = []
    cols = _columns_by_key(model)

    for k in payload.keys():
        if k not in policy.fields:
            errors.append(f"Field not allowed: {k}")

    patch: dict = {}

    for api_field, column_key in policy.fields.items():
        label = policy.label(api_field)
        if api_field not in payload:
            if not partial and api_field in policy.required_on_create:
                errors.append(f"The {label} is required")
            continue

        col = cols[column_key]
        raw = payload[api_field]

        if raw is None or (isinstance(raw, str) and raw.strip() == ""):
            if not col.nullable:
                errors.append(f"The {label} is required")
            else:
                patch[column_key] = None
            continue

        try:
            val = _coerce_value(col, raw)
        except ValueError:
            errors.append(f"Invalid {label}")
            continue

        if isinstance(col.type, String) and col.type.length and len(val) > col.type.length:
            errors.append(f"The {label} exceeds max length {col.type.length}")
            continue

        patch[column_key] = val

    if errors:
        raise ValidationError(errors)
    return patch


def enforce_rules_product(patch: dict) -> None:
    """
    Business rules that are not captured by SQLAlchemy metadata alone.
    Keep these small and centralized.
    """
    errors = []
    price = patch.get("price")
    if price is not None:
        if price < 0:
            errors.append("The price must be >= 0")
        elif price > MAX_PRICE:
            errors.append(f"The price cannot exceed {MAX_PRICE}")
    inventory = patch.get("inventory")
    if inventory is not None and inventory < 0:
        errors.append("The inventory must be >= 0")
    if errors:
        raise ValidationError(errors)


def enforce_rules_coupon(patch: dict) -> None:
    percentage = patch.get("percentage")
    if percentage is None:
        return
    if percentage > 100:
        raise ValidationError("The max percentage is 100")
    if percentage < 1:
        raise ValidationError("The min percentage is 1")


def validate_transaction_payload(payload: Any) -> dict:
    """
    Validate the POST /transactions body:

        {"total": number, "coupon": str?, "contents": [{"productId", "quantity", "price"}]}

    Returns {"total": Decimal, "coupon": str | None,
             "contents": [{"product_id": int, "quantity": int, "price": Decimal}]}
    """
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    errors: list[str] = []
    allowed = {"total", "coupon", "contents"}
    for k in payload.keys():
        if k not in allowed:
            errors.append(f"Field not allowed: {k}")

    total = None
    if payload.get("total") is None:
        errors.append("The total can't be empty")
    else:
        try:
            total = to_cents(payload["total"])
        except ValueError:
            errors.append("Invalid total")

    coupon = payload.get("coupon")
    if coupon is not None and not isinstance(coupon, str):
        errors.append("Invalid coupon")
        coupon = None
    coupon = coupon.strip() if coupon else None

    contents = payload.get("contents")
    cleaned: list[dict] = []
    if not isinstance(contents, list):
        errors.append("The contents must be an array")
    elif not contents:
        errors.append("The contents can't be empty")
    else:
        for i, item in enumerate(contents):
            prefix = f"contents[{i}]"
            if not isinstance(item, dict):
                errors.append(f"{prefix}: invalid line item")
                continue
            line: dict = {}
            for api_field, key, coerce in (
                ("productId", "product_id", coerce_int),
                ("quantity", "quantity", coerce_int),
                ("price", "price", to_cents),
            ):
                raw = item.get(api_field)
                if raw is None:
                    errors.append(f"{prefix}: the {api_field} can't be empty")
                    continue
                try:
                    line[key] = coerce(raw)
                except ValueError:
                    errors.append(f"{prefix}: invalid {api_field}")
            if "quantity" in line and line["quantity"] <= 0:
                errors.append(f"{prefix}: the quantity must be greater than 0")
            if "price" in line and line["price"] < 0:
                errors.append(f"{prefix}: the price must be >= 0")
            cleaned.append(line)

    if errors:
        raise ValidationError(errors)

    return {"total": total, "coupon": coupon, "contents": cleaned}

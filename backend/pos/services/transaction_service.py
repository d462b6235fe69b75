"""
Transactions Service - sale creation and reversal

Creation and reversal each run as ONE unit of work on db.session: every
header insert, inventory change and line-item insert/delete commits together
or is rolled back together (see concurrency.run_with_retry).
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from flask import current_app
from sqlalchemy.orm import selectinload

from ..extensions import db
from ..errors import BadRequestError, NotFoundError
from ..models import Product, Transaction, TransactionContents
from ..time_utils import parse_iso_date, start_of_day, end_of_day
from ..validation import CENTS
from .coupon_service import apply_coupon
from .inventory_service import reserve, release
from .concurrency import lock_for_update, run_with_retry

SALE_STORED_MESSAGE = "Sale storaged correctly"


def contents_total(contents: list[dict]) -> Decimal:
    """Sum of quantity * unit price over validated line items."""
    return sum((Decimal(line["quantity"]) * line["price"] for line in contents), Decimal("0"))


def compute_discount(percentage: int, raw_total: Decimal) -> Decimal:
    """percentage/100 * raw_total, rounded half-up to cents."""
    return (Decimal(percentage) / Decimal(100) * raw_total).quantize(CENTS, rounding=ROUND_HALF_UP)


def _check_client_total(client_total: Decimal | None, raw_total: Decimal) -> None:
    if client_total is None or client_total == raw_total:
        return
    if current_app.config.get("STRICT_TRANSACTION_TOTAL"):
        raise BadRequestError(["The total does not match the contents"])
    current_app.logger.warning(
        "Client total %s differs from computed total %s; using computed total",
        client_total, raw_total,
    )


def create_transaction(payload: dict) -> str:
    """
    Store a sale from a validated payload (see validation.validate_transaction_payload).

    Steps (all inside one unit of work):
    1. Insert the header with the raw total to obtain its id
    2. Apply the coupon, if any: discount and post-discount total
    3. For each line, in order: lock the product row, reserve stock, insert the line

    Any NotFoundError / BadRequestError / UnprocessableError aborts the whole
    sale: no header, no lines and no inventory change survive.
    """
    contents = payload["contents"]
    raw_total = contents_total(contents)
    _check_client_total(payload.get("total"), raw_total)

    def _op():
        transaction = Transaction(total=raw_total, discount=Decimal("0"))
        db.session.add(transaction)
        db.session.flush()

        coupon_name = payload.get("coupon")
        if coupon_name:
            coupon = apply_coupon(coupon_name)
            discount = compute_discount(coupon.percentage, raw_total)
            transaction.discount = discount
            transaction.coupon = coupon.name
            transaction.total = raw_total - discount

        for line in contents:
            product = lock_for_update(
                db.session.query(Product).filter_by(id=line["product_id"])
            ).first()
            if product is None:
                raise NotFoundError([f"The Product with ID {line['product_id']} does not found"])

            reserve(product, line["quantity"])

            db.session.add(TransactionContents(
                transaction=transaction,
                product=product,
                quantity=line["quantity"],
                price=line["price"],
            ))
            db.session.flush()

        db.session.commit()
        return transaction

    transaction = run_with_retry(_op)
    current_app.logger.info(
        "Transaction %s stored: total=%s discount=%s coupon=%s lines=%d",
        transaction.id, transaction.total, transaction.discount, transaction.coupon, len(contents),
    )
    return SALE_STORED_MESSAGE


def _with_contents(query):
    return query.options(
        selectinload(Transaction.contents).selectinload(TransactionContents.product)
    )


def find_all(transaction_date: str | None = None) -> list[Transaction]:
    """
    All transactions with their contents, optionally limited to one calendar
    day (UTC) given as "YYYY-MM-DD".
    """
    query = _with_contents(db.session.query(Transaction))

    if transaction_date:
        day = parse_iso_date(transaction_date)
        if day is None:
            raise BadRequestError("Invalid Date")
        query = query.filter(
            Transaction.transaction_date.between(start_of_day(day), end_of_day(day))
        )

    return query.order_by(Transaction.id.asc()).all()


def find_one(transaction_id: int) -> Transaction:
    transaction = _with_contents(db.session.query(Transaction)).filter_by(id=transaction_id).first()
    if transaction is None:
        raise NotFoundError(f"The Transaction with ID {transaction_id} does not found")
    return transaction


def remove_transaction(transaction_id: int) -> dict:
    """
    Reverse a sale: restore each line's inventory, delete the lines, then the header.

    Lines whose product no longer exists are deleted without restoring stock.
    """
    def _op():
        transaction = find_one(transaction_id)

        for line in list(transaction.contents):
            if release(line.product_id, line.quantity) is None:
                current_app.logger.info(
                    "Product %s of transaction %s no longer exists; inventory not restored",
                    line.product_id, transaction_id,
                )
            db.session.delete(line)

        db.session.delete(transaction)
        db.session.commit()

    run_with_retry(_op)
    current_app.logger.info("Transaction %s removed", transaction_id)
    return {"message": f"The Transaction with ID {transaction_id} was removed"}

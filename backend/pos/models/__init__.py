from .catalog import Category, Product, DEFAULT_PRODUCT_IMAGE
from .coupons import Coupon
from .transactions import Transaction, TransactionContents

__all__ = [
    'Category', 'Product', 'DEFAULT_PRODUCT_IMAGE',
    'Coupon',
    'Transaction', 'TransactionContents',
]

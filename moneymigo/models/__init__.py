"""Database models initialization."""

# Import all models to ensure they're registered with SQLAlchemy
from .transaction import Transaction
from .payment_type import PaymentType, DEFAULT_PAYMENT_TYPES

__all__ = [
    "Transaction",
    "PaymentType",
    "DEFAULT_PAYMENT_TYPES"
]

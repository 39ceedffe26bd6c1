from .enums import Role, BookStatus, TransactionStatus, OPEN_TRANSACTION_STATUSES
from .user import User
from .book import Book
from .transaction import Transaction

__all__ = [
    "Role",
    "BookStatus",
    "TransactionStatus",
    "OPEN_TRANSACTION_STATUSES",
    "User",
    "Book",
    "Transaction",
]

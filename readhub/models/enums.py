import enum


class Role(str, enum.Enum):
    BORROWER = "BORROWER"
    ADMIN = "ADMIN"


class BookStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    BORROWED = "BORROWED"


class TransactionStatus(str, enum.Enum):
    """Lifecycle of a borrow.

    REQUESTED -> APPROVED -> BORROWED -> RETURNED
    REQUESTED -> REJECTED
    """
    REQUESTED = "REQUESTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    BORROWED = "BORROWED"
    RETURNED = "RETURNED"


OPEN_TRANSACTION_STATUSES = (
    TransactionStatus.REQUESTED,
    TransactionStatus.APPROVED,
    TransactionStatus.BORROWED,
)

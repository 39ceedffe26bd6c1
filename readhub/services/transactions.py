"""Borrow transaction workflow.

Every transition reads the transaction row with ``FOR UPDATE``, checks the
current status and commits once, so concurrent requests cannot both move
the same transaction.
"""
import logging
from datetime import timedelta
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from readhub.config import settings
from readhub.exceptions import ConflictError, InvalidStateError, NotFoundError
from readhub.models.enums import BookStatus, Role, TransactionStatus
from readhub.models.transaction import Transaction
from readhub.repositories.book import BookRepository
from readhub.repositories.transaction import TransactionRepository
from readhub.services.auth import CallerContext
from readhub.utils.timezone import now_local

logger = logging.getLogger(__name__)

# action -> (required current status, resulting status)
TRANSITIONS = {
    "approve": (TransactionStatus.REQUESTED, TransactionStatus.APPROVED),
    "reject": (TransactionStatus.REQUESTED, TransactionStatus.REJECTED),
    "pickup": (TransactionStatus.APPROVED, TransactionStatus.BORROWED),
    "return": (TransactionStatus.BORROWED, TransactionStatus.RETURNED),
}


def request_borrow(db: Session, caller: CallerContext, book_id: int) -> Transaction:
    """Open a REQUESTED transaction for an AVAILABLE book."""
    book = BookRepository(db).get(book_id, for_update=True)
    if book is None:
        raise NotFoundError("Book not found")
    if book.status != BookStatus.AVAILABLE:
        raise ConflictError(f"Book is not available (status: {book.status.value})")

    transactions = TransactionRepository(db)
    if transactions.find_open(caller.user_id, book_id) is not None:
        raise ConflictError("You already have an open request for this book")

    borrow_date = now_local()
    transaction = Transaction(
        user_id=caller.user_id,
        book_id=book_id,
        borrow_date=borrow_date,
        due_date=borrow_date + timedelta(days=settings.loan_period_days),
        status=TransactionStatus.REQUESTED,
    )
    try:
        transactions.insert(transaction)
        db.commit()
    except IntegrityError:
        # User or book removed by a concurrent request
        db.rollback()
        raise ConflictError("Borrow request could not be recorded; user or book no longer exists")
    db.refresh(transaction)
    logger.info(f"User {caller.user_id} requested book {book_id} (transaction {transaction.transaction_id})")
    return transaction


def get_transaction(db: Session, caller: CallerContext, transaction_id: int) -> Transaction:
    """Admins see every transaction, borrowers only their own."""
    transaction = TransactionRepository(db).get(transaction_id)
    if transaction is None:
        raise NotFoundError("Transaction not found")
    if caller.role != Role.ADMIN and transaction.user_id != caller.user_id:
        raise NotFoundError("Transaction not found")
    return transaction


def list_transactions(
    db: Session,
    user_id: Optional[int] = None,
    status: Optional[TransactionStatus] = None,
) -> List[Transaction]:
    return TransactionRepository(db).list(user_id=user_id, status=status)


def transition(db: Session, caller: CallerContext, transaction_id: int, action: str) -> Transaction:
    """Apply one workflow action and its side effect on the book."""
    if action not in TRANSITIONS:
        raise ValueError(f"Unknown transaction action '{action}'")
    expected, target = TRANSITIONS[action]

    transactions = TransactionRepository(db)
    transaction = transactions.get(transaction_id, for_update=True)
    if transaction is None:
        raise NotFoundError("Transaction not found")
    if transaction.status != expected:
        raise InvalidStateError(
            f"Cannot {action} a transaction in status {transaction.status.value}"
        )

    if target in (TransactionStatus.BORROWED, TransactionStatus.RETURNED):
        book = BookRepository(db).get(transaction.book_id, for_update=True)
        if target == TransactionStatus.BORROWED:
            if book.status != BookStatus.AVAILABLE:
                raise ConflictError(f"Book is not available (status: {book.status.value})")
            book.status = BookStatus.BORROWED
        else:
            book.status = BookStatus.AVAILABLE
            transaction.return_date = now_local()

    transaction.status = target
    transactions.update(transaction)
    db.commit()
    db.refresh(transaction)
    logger.info(
        f"Transaction {transaction_id}: {expected.value} -> {target.value} by {caller.email}"
    )
    return transaction


def approve(db: Session, caller: CallerContext, transaction_id: int) -> Transaction:
    return transition(db, caller, transaction_id, "approve")


def reject(db: Session, caller: CallerContext, transaction_id: int) -> Transaction:
    return transition(db, caller, transaction_id, "reject")


def confirm_pickup(db: Session, caller: CallerContext, transaction_id: int) -> Transaction:
    return transition(db, caller, transaction_id, "pickup")


def confirm_return(db: Session, caller: CallerContext, transaction_id: int) -> Transaction:
    return transition(db, caller, transaction_id, "return")

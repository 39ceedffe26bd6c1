from typing import List, Optional
from sqlalchemy.orm import Session
from readhub.models.enums import TransactionStatus, OPEN_TRANSACTION_STATUSES
from readhub.models.transaction import Transaction


class TransactionRepository:
    """Borrow records; user and book are referenced by id only."""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, transaction: Transaction) -> Transaction:
        self.db.add(transaction)
        self.db.flush()
        return transaction

    def get(self, transaction_id: int, for_update: bool = False) -> Optional[Transaction]:
        query = self.db.query(Transaction).filter(Transaction.transaction_id == transaction_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def list(
        self,
        user_id: Optional[int] = None,
        status: Optional[TransactionStatus] = None,
    ) -> List[Transaction]:
        query = self.db.query(Transaction)
        if user_id is not None:
            query = query.filter(Transaction.user_id == user_id)
        if status is not None:
            query = query.filter(Transaction.status == status)
        return query.order_by(Transaction.borrow_date.desc(), Transaction.transaction_id.desc()).all()

    def find_open(self, user_id: int, book_id: int) -> Optional[Transaction]:
        return self.db.query(Transaction).filter(
            Transaction.user_id == user_id,
            Transaction.book_id == book_id,
            Transaction.status.in_(OPEN_TRANSACTION_STATUSES)
        ).first()

    def has_open_for_user(self, user_id: int) -> bool:
        return self.db.query(Transaction.transaction_id).filter(
            Transaction.user_id == user_id,
            Transaction.status.in_(OPEN_TRANSACTION_STATUSES)
        ).first() is not None

    def count_for_book(self, book_id: int) -> int:
        return self.db.query(Transaction).filter(Transaction.book_id == book_id).count()

    def update(self, transaction: Transaction) -> Transaction:
        self.db.flush()
        return transaction

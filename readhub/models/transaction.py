from sqlalchemy import Column, DateTime, Integer, Enum, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from readhub.database import Base
from readhub.models.enums import TransactionStatus

class Transaction(Base):
    __tablename__ = "transactions"
    
    transaction_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("books.book_id", ondelete="RESTRICT"), nullable=False, index=True)
    borrow_date = Column(DateTime(timezone=True), nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False)
    return_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(Enum(TransactionStatus, name="transaction_status"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    user = relationship("User", back_populates="transactions")
    book = relationship("Book", back_populates="transactions")
    
    __table_args__ = (
        CheckConstraint(
            "(status = 'RETURNED') = (return_date IS NOT NULL)",
            name="chk_transaction_return_date",
        ),
    )
    
    def to_dict(self):
        return {
            "id": self.transaction_id,
            "userId": self.user_id,
            "bookId": self.book_id,
            "borrowDate": self.borrow_date.isoformat() if self.borrow_date else None,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "returnDate": self.return_date.isoformat() if self.return_date else None,
            "status": self.status.value,
        }

from sqlalchemy import Column, String, DateTime, Integer, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from readhub.database import Base
from readhub.models.enums import BookStatus

class Book(Base):
    __tablename__ = "books"
    
    book_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    isbn = Column(String(20), unique=True, nullable=False, index=True)
    category = Column(String(100), nullable=False)
    status = Column(Enum(BookStatus, name="book_status"), default=BookStatus.AVAILABLE, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # Lookup only; a book does not own its transactions
    transactions = relationship("Transaction", back_populates="book")
    
    def to_dict(self):
        return {
            "id": self.book_id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "category": self.category,
            "status": self.status.value,
        }

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from readhub.models.enums import TransactionStatus

class BorrowRequest(BaseModel):
    book_id: int = Field(..., alias="bookId", gt=0)

    class Config:
        populate_by_name = True

class TransactionResponse(BaseModel):
    id: int
    userId: int
    bookId: int
    borrowDate: datetime
    dueDate: datetime
    returnDate: Optional[datetime] = None
    status: TransactionStatus

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from readhub.database import get_db
from readhub.models.enums import TransactionStatus
from readhub.schemas.transaction import BorrowRequest, TransactionResponse
from readhub.services import transactions as workflow
from readhub.services.auth import CallerContext
from readhub.services.policy import requires

router = APIRouter(prefix="/api/transactions", tags=["Transactions"])

@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def request_borrow(
    request: BorrowRequest,
    caller: CallerContext = Depends(requires("transactions:request")),
    db: Session = Depends(get_db)
):
    """Ask to borrow a book; an administrator approves or rejects it."""
    transaction = workflow.request_borrow(db, caller, request.book_id)
    return TransactionResponse(**transaction.to_dict())

@router.get("/mine", response_model=List[TransactionResponse])
async def get_my_transactions(
    caller: CallerContext = Depends(requires("transactions:mine")),
    db: Session = Depends(get_db)
):
    transactions = workflow.list_transactions(db, user_id=caller.user_id)
    return [TransactionResponse(**t.to_dict()) for t in transactions]

@router.get("", response_model=List[TransactionResponse])
async def get_transactions(
    transaction_status: Optional[TransactionStatus] = Query(None, alias="status"),
    _caller=Depends(requires("transactions:list")),
    db: Session = Depends(get_db)
):
    transactions = workflow.list_transactions(db, status=transaction_status)
    return [TransactionResponse(**t.to_dict()) for t in transactions]

@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: int,
    caller: CallerContext = Depends(requires("transactions:read")),
    db: Session = Depends(get_db)
):
    transaction = workflow.get_transaction(db, caller, transaction_id)
    return TransactionResponse(**transaction.to_dict())

@router.post("/{transaction_id}/approve", response_model=TransactionResponse)
async def approve(
    transaction_id: int,
    caller: CallerContext = Depends(requires("transactions:approve")),
    db: Session = Depends(get_db)
):
    return TransactionResponse(**workflow.approve(db, caller, transaction_id).to_dict())

@router.post("/{transaction_id}/reject", response_model=TransactionResponse)
async def reject(
    transaction_id: int,
    caller: CallerContext = Depends(requires("transactions:reject")),
    db: Session = Depends(get_db)
):
    return TransactionResponse(**workflow.reject(db, caller, transaction_id).to_dict())

@router.post("/{transaction_id}/pickup", response_model=TransactionResponse)
async def confirm_pickup(
    transaction_id: int,
    caller: CallerContext = Depends(requires("transactions:pickup")),
    db: Session = Depends(get_db)
):
    """Admin confirms the borrower collected the book."""
    return TransactionResponse(**workflow.confirm_pickup(db, caller, transaction_id).to_dict())

@router.post("/{transaction_id}/return", response_model=TransactionResponse)
async def confirm_return(
    transaction_id: int,
    caller: CallerContext = Depends(requires("transactions:return")),
    db: Session = Depends(get_db)
):
    """Admin confirms the book is back on the shelf."""
    return TransactionResponse(**workflow.confirm_return(db, caller, transaction_id).to_dict())

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from readhub.database import get_db
from readhub.models.enums import BookStatus
from readhub.schemas.book import BookCreate, BookUpdate, BookResponse
from readhub.schemas.user import MessageResponse
from readhub.services import catalog
from readhub.services.policy import requires

router = APIRouter(prefix="/api/books", tags=["Books"])

@router.get("", response_model=List[BookResponse])
async def get_books(
    search: Optional[str] = Query(None, description="Search by title, author, or ISBN"),
    category: Optional[str] = Query(None, description="Filter by category"),
    book_status: Optional[BookStatus] = Query(None, alias="status", description="Filter by availability"),
    _caller=Depends(requires("books:list")),
    db: Session = Depends(get_db)
):
    """Get list of books with optional search and filter."""
    books = catalog.list_books(db, search=search, category=category, status=book_status)
    return [BookResponse(**book.to_dict()) for book in books]

@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: int,
    _caller=Depends(requires("books:read")),
    db: Session = Depends(get_db)
):
    return BookResponse(**catalog.get_book(db, book_id).to_dict())

@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    book_data: BookCreate,
    _caller=Depends(requires("books:create")),
    db: Session = Depends(get_db)
):
    book = catalog.create_book(db, **book_data.model_dump())
    return BookResponse(**book.to_dict())

@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: int,
    book_data: BookUpdate,
    _caller=Depends(requires("books:update")),
    db: Session = Depends(get_db)
):
    book = catalog.update_book(db, book_id, **book_data.model_dump())
    return BookResponse(**book.to_dict())

@router.delete("/{book_id}", response_model=MessageResponse)
async def delete_book(
    book_id: int,
    _caller=Depends(requires("books:delete")),
    db: Session = Depends(get_db)
):
    catalog.delete_book(db, book_id)
    return MessageResponse(message="Book deleted successfully.")

import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from readhub.exceptions import ConflictError, NotFoundError
from readhub.models.book import Book
from readhub.models.enums import BookStatus
from readhub.repositories.book import BookRepository
from readhub.repositories.transaction import TransactionRepository

logger = logging.getLogger(__name__)


def list_books(
    db: Session,
    search: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[BookStatus] = None,
) -> List[Book]:
    return BookRepository(db).list(search=search, category=category, status=status)


def get_book(db: Session, book_id: int) -> Book:
    book = BookRepository(db).get(book_id)
    if book is None:
        raise NotFoundError("Book not found")
    return book


def _isbn_conflict(db: Session, isbn: str) -> ConflictError:
    db.rollback()
    return ConflictError(f"A book with ISBN {isbn} already exists")


def create_book(db: Session, title: str, author: str, isbn: str, category: str) -> Book:
    books = BookRepository(db)
    if books.get_by_isbn(isbn) is not None:
        raise ConflictError(f"A book with ISBN {isbn} already exists")

    book = Book(title=title, author=author, isbn=isbn, category=category, status=BookStatus.AVAILABLE)
    try:
        books.insert(book)
        db.commit()
    except IntegrityError:
        # Another writer took the ISBN after the check above
        raise _isbn_conflict(db, isbn)
    db.refresh(book)
    logger.info(f"Added book {book.book_id} ({book.isbn})")
    return book


def update_book(db: Session, book_id: int, title: str, author: str, isbn: str, category: str) -> Book:
    """Replace the bibliographic fields; availability is left to the workflow."""
    books = BookRepository(db)
    book = get_book(db, book_id)

    existing = books.get_by_isbn(isbn)
    if existing is not None and existing.book_id != book.book_id:
        raise ConflictError(f"A book with ISBN {isbn} already exists")

    book.title = title
    book.author = author
    book.isbn = isbn
    book.category = category
    try:
        books.update(book)
        db.commit()
    except IntegrityError:
        raise _isbn_conflict(db, isbn)
    db.refresh(book)
    return book


def delete_book(db: Session, book_id: int) -> None:
    book = get_book(db, book_id)
    if TransactionRepository(db).count_for_book(book_id):
        raise ConflictError("Cannot delete a book that has borrow history")
    BookRepository(db).delete(book)
    db.commit()
    logger.info(f"Deleted book {book_id}")

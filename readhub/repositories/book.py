from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from readhub.models.book import Book
from readhub.models.enums import BookStatus


class BookRepository:
    """Catalog store: books keyed by id and by unique ISBN."""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, book: Book) -> Book:
        self.db.add(book)
        self.db.flush()
        return book

    def get(self, book_id: int, for_update: bool = False) -> Optional[Book]:
        query = self.db.query(Book).filter(Book.book_id == book_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        return self.db.query(Book).filter(Book.isbn == isbn).first()

    def list(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        status: Optional[BookStatus] = None,
    ) -> List[Book]:
        query = self.db.query(Book)
        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    Book.title.ilike(search_term),
                    Book.author.ilike(search_term),
                    Book.isbn.ilike(search_term)
                )
            )
        if category:
            query = query.filter(Book.category == category)
        if status:
            query = query.filter(Book.status == status)
        return query.order_by(Book.title).all()

    def update(self, book: Book) -> Book:
        self.db.flush()
        return book

    def delete(self, book: Book) -> None:
        self.db.delete(book)
        self.db.flush()

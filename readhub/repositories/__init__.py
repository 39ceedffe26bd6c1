from .user import UserRepository
from .book import BookRepository
from .transaction import TransactionRepository

__all__ = ["UserRepository", "BookRepository", "TransactionRepository"]

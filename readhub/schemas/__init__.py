from .auth import UserCreate, UserLogin, RegisterResponse, Token
from .user import ProfileUpdate, ProfileResponse, MessageResponse
from .book import BookBase, BookCreate, BookUpdate, BookResponse
from .transaction import BorrowRequest, TransactionResponse

__all__ = [
    "UserCreate", "UserLogin", "RegisterResponse", "Token",
    "ProfileUpdate", "ProfileResponse", "MessageResponse",
    "BookBase", "BookCreate", "BookUpdate", "BookResponse",
    "BorrowRequest", "TransactionResponse",
]

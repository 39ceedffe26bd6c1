from typing import Optional
from sqlalchemy.orm import Session
from readhub.models.user import User


class UserRepository:
    """Credential store: users keyed by id and by unique email."""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.user_id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def email_taken(self, email: str, exclude_user_id: Optional[int] = None) -> bool:
        query = self.db.query(User.user_id).filter(User.email == email)
        if exclude_user_id is not None:
            query = query.filter(User.user_id != exclude_user_id)
        return query.first() is not None

    def update(self, user: User) -> User:
        self.db.flush()
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.flush()

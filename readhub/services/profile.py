import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from readhub.exceptions import ConflictError, NotFoundError
from readhub.models.user import User
from readhub.repositories.transaction import TransactionRepository
from readhub.repositories.user import UserRepository

logger = logging.getLogger(__name__)


def _get_user(users: UserRepository, email: str) -> User:
    user = users.get_by_email(email)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_profile(db: Session, caller_email: str) -> User:
    return _get_user(UserRepository(db), caller_email)


def update_profile(db: Session, caller_email: str, first_name: str, last_name: str, email: str) -> User:
    """Update names and, when it is free, the email address."""
    users = UserRepository(db)
    user = _get_user(users, caller_email)

    if email != user.email and users.email_taken(email, exclude_user_id=user.user_id):
        raise ConflictError("Error: Email is already in use!")

    user.first_name = first_name
    user.last_name = last_name
    user.email = email
    try:
        users.update(user)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Error: Email is already in use!")
    db.refresh(user)
    logger.info(f"Updated profile of user {user.user_id}")
    return user


def delete_profile(db: Session, caller_email: str) -> None:
    """Remove the caller's account.

    Refused while the user has open transactions; closed ones are removed
    with the user by the foreign key's ON DELETE CASCADE.
    """
    users = UserRepository(db)
    user = _get_user(users, caller_email)

    if TransactionRepository(db).has_open_for_user(user.user_id):
        raise ConflictError("Cannot delete a profile with open borrow transactions")

    user_id = user.user_id
    users.delete(user)
    db.commit()
    logger.info(f"Deleted user {user_id}")

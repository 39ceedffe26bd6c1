import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from readhub.config import settings
from readhub.database import get_db
from readhub.exceptions import AuthenticationError, ConflictError
from readhub.models.enums import Role
from readhub.models.user import User
from readhub.repositories.user import UserRepository
from readhub.utils.timezone import now_local

logger = logging.getLogger(__name__)

# HTTP Bearer token - auto_error=False so a missing header means "anonymous"
security = HTTPBearer(auto_error=False)

# Password hashing context - using bcrypt with automatic salt generation
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class CallerContext:
    """Identity established from a verified token, passed explicitly to services."""
    user_id: int
    email: str
    role: Role


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        logger.error(f"Password verification error: {e}. Hash format may be invalid.")
        return False

def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    issued_at = now_local()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)
    to_encode.update({"iat": issued_at, "exp": issued_at + expires_delta})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

def decode_access_token(token: str) -> CallerContext:
    """Verify signature and expiry and turn the claims into a caller context."""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        logger.warning("Rejected expired token")
        raise AuthenticationError("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation error: {str(e)}")
        raise AuthenticationError("Invalid token")

    try:
        return CallerContext(
            user_id=int(payload["uid"]),
            email=payload["sub"],
            role=Role(payload["role"]),
        )
    except (KeyError, ValueError, TypeError) as e:
        logger.warning(f"Token parsing error: {str(e)}")
        raise AuthenticationError("Invalid token")


def register_user(db: Session, first_name: str, last_name: str, email: str, password: str) -> User:
    """Create a BORROWER account; the email must not be registered yet."""
    users = UserRepository(db)
    if users.email_taken(email):
        raise ConflictError("Error: Email is already in use!")

    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password_hash=get_password_hash(password),
        role=Role.BORROWER,
    )
    try:
        users.insert(user)
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration of the same email
        db.rollback()
        raise ConflictError("Error: Email is already in use!")
    db.refresh(user)
    logger.info(f"Registered user {user.user_id} ({user.email})")
    return user


def login_user(db: Session, email: str, password: str) -> str:
    """Check credentials and issue a signed access token."""
    user = UserRepository(db).get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login attempt for {email}")
        raise AuthenticationError("Error: Invalid username or password")

    return create_access_token(
        data={"sub": user.email, "role": user.role.value, "uid": str(user.user_id)}
    )


def ensure_admin(db: Session, email: str, password: str, first_name: str, last_name: str) -> User:
    """Create the administrator account if it does not exist yet."""
    users = UserRepository(db)
    user = users.get_by_email(email)
    if user is not None:
        if user.role != Role.ADMIN:
            logger.warning(f"Bootstrap admin {email} exists with role {user.role.value}; leaving it unchanged")
        return user

    user = users.insert(User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password_hash=get_password_hash(password),
        role=Role.ADMIN,
    ))
    db.commit()
    db.refresh(user)
    logger.info(f"Created administrator {email}")
    return user


def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Optional[CallerContext]:
    """Token verification filter, run once for every request.

    No bearer header means an anonymous caller; a header carrying a bad or
    expired token fails the request. The token must still name an existing
    user by id, with the same email it was issued for.
    """
    if credentials is None:
        return None
    if not credentials.credentials:
        raise AuthenticationError()
    claims = decode_access_token(credentials.credentials)

    user = UserRepository(db).get(claims.user_id)
    if user is None or user.email != claims.email:
        logger.warning(f"Token for user {claims.user_id} ({claims.email}) no longer matches a stored account")
        raise AuthenticationError("Could not validate credentials")
    return CallerContext(user_id=user.user_id, email=user.email, role=user.role)

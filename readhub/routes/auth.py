from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from readhub.database import get_db
from readhub.schemas.auth import UserCreate, UserLogin, RegisterResponse, Token
from readhub.schemas.user import ProfileResponse
from readhub.services import auth as auth_service
from readhub.services import profile as profile_service
from readhub.services.auth import CallerContext
from readhub.services.policy import requires

router = APIRouter(prefix="/api/auth", tags=["Authentication"])

@router.post("/register", response_model=RegisterResponse)
async def register(
    user_data: UserCreate,
    _caller=Depends(requires("auth:register")),
    db: Session = Depends(get_db)
):
    """Register a new borrower account."""
    user = auth_service.register_user(
        db,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        password=user_data.password,
    )
    return RegisterResponse(message="User registered successfully!", id=user.user_id)

@router.post("/login", response_model=Token)
async def login(
    user_data: UserLogin,
    _caller=Depends(requires("auth:login")),
    db: Session = Depends(get_db)
):
    """Login and get access token."""
    token = auth_service.login_user(db, user_data.email, user_data.password)
    return Token(token=token, token_type="bearer")

@router.get("/me", response_model=ProfileResponse)
async def get_current_user_info(
    caller: CallerContext = Depends(requires("auth:me")),
    db: Session = Depends(get_db)
):
    """Get current authenticated user information."""
    user = profile_service.get_profile(db, caller.email)
    return ProfileResponse(**user.to_dict())

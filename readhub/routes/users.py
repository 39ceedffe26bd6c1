from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from readhub.database import get_db
from readhub.schemas.user import ProfileUpdate, ProfileResponse, MessageResponse
from readhub.services import profile as profile_service
from readhub.services.auth import CallerContext
from readhub.services.policy import requires

router = APIRouter(prefix="/api/users", tags=["Users"])

@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    caller: CallerContext = Depends(requires("profile:read")),
    db: Session = Depends(get_db)
):
    user = profile_service.get_profile(db, caller.email)
    return ProfileResponse(**user.to_dict())

@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    profile: ProfileUpdate,
    caller: CallerContext = Depends(requires("profile:update")),
    db: Session = Depends(get_db)
):
    """Update the caller's names and email.

    A changed email invalidates nothing server-side, but tokens carry the old
    address as subject, so clients should log in again afterwards.
    """
    user = profile_service.update_profile(
        db,
        caller.email,
        first_name=profile.first_name,
        last_name=profile.last_name,
        email=profile.email,
    )
    return ProfileResponse(**user.to_dict())

@router.delete("/profile", response_model=MessageResponse)
async def delete_profile(
    caller: CallerContext = Depends(requires("profile:delete")),
    db: Session = Depends(get_db)
):
    profile_service.delete_profile(db, caller.email)
    return MessageResponse(message="User profile deleted successfully.")

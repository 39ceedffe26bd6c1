from pydantic import BaseModel, EmailStr, Field
from typing import Optional

class ProfileUpdate(BaseModel):
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=100)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=100)
    email: EmailStr

    class Config:
        populate_by_name = True

class ProfileResponse(BaseModel):
    """Profile projection; never carries the password hash."""
    id: int
    firstName: str
    lastName: str
    email: str

class MessageResponse(BaseModel):
    message: str

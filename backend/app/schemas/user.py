"""
Pydantic schemas for sign-up and sign-in.
"""

from pydantic import BaseModel, EmailStr, Field


class SignUpInput(BaseModel):
    email: EmailStr
    # bcrypt only hashes the first 72 bytes
    password: str = Field(..., min_length=8, max_length=72)


class SignInInput(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: int
    email: str

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    """Sign-in result: the user and the bearer token for the booking endpoints."""

    user: UserResponse
    token: str

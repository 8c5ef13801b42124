"""
Account endpoints: sign-up (POST /users) and sign-in (POST /auth/sign-in).
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.user import SignUpInput, SignInInput, UserResponse, SessionResponse
from app.services.auth_service import sign_up, sign_in

router = APIRouter(tags=["Authentication"])


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(data: SignUpInput, db: AsyncSession = Depends(get_db)):
    return await sign_up(db, data)


@router.post("/auth/sign-in", response_model=SessionResponse)
async def create_session(data: SignInInput, db: AsyncSession = Depends(get_db)):
    """Returns the user and a bearer token for the booking endpoints."""
    user, token = await sign_in(db, data)
    return SessionResponse(user=UserResponse.model_validate(user), token=token)

"""
Account service: sign-up and sign-in.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.models.user import User
from app.schemas.user import SignUpInput, SignInInput
from app.core.security import hash_password, verify_password, create_access_token
from app.core.logging import get_logger

logger = get_logger(__name__)


async def _find_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def sign_up(db: AsyncSession, data: SignUpInput) -> User:
    """Create an account. 409 if the email is already registered."""
    if await _find_by_email(db, data.email):
        logger.warning("sign_up_failed", reason="email_exists")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already in use",
        )

    user = User(email=data.email, hashed_password=hash_password(data.password))
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("user_signed_up", user_id=user.id)
    return user


async def sign_in(db: AsyncSession, data: SignInInput) -> tuple[User, str]:
    """
    Check credentials and issue a bearer token whose subject is the user id.
    Raises 401 for bad credentials, 403 for a deactivated account.
    """
    user = await _find_by_email(db, data.email)

    if not user or not verify_password(data.password, user.hashed_password):
        logger.warning("sign_in_failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated",
        )

    token = create_access_token(data={"sub": str(user.id)})
    logger.info("user_signed_in", user_id=user.id)
    return user, token

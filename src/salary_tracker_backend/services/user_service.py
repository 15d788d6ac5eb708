'''
User registration and login.
'''
from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..models import user as user_models
from ..common.security_utils import HashedPassword, JWTHandler
from ..common.logger import log


class UserService:
    """
    Registers users with a hashed password and verifies their credentials.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)]
    ):
        self.db = db

    async def get_user_by_email(self, email: str) -> Optional[db_models.Users]:
        stmt = select(db_models.Users).filter(db_models.Users.email == email)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def register_user(self, data: user_models.UserCreate) -> user_models.UserCreated:
        log.info(f"Registering user: {data.email}")
        try:
            if await self.get_user_by_email(data.email):
                log.warning(f"Registration rejected, email already in use: {data.email}")
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="User with this email already exists"
                )

            new_user = db_models.Users(
                username=data.username,
                email=data.email,
                password=HashedPassword.get_hash(data.password)
            )
            self.db.add(new_user)
            await self.db.flush()

            log.info(f"Registered user {new_user.id} ({new_user.email})")
            return user_models.UserCreated(message="User registered successfully", inserted_id=new_user.id)

        except HTTPException as http_exc:
            raise http_exc
        except Exception as e:
            log.error(f"Error saving user {data.email}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Server error during user registration"
            )

    async def login_user(self, data: user_models.UserLogin) -> user_models.LoginResponse:
        log.info(f"Attempting login for user: {data.email}")
        try:
            user = await self.get_user_by_email(data.email)
            if not user:
                log.warning(f"Login failed for {data.email}: user not found")
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

            if not HashedPassword.verify(data.password, user.password):
                log.warning(f"Login failed for {data.email}: invalid credentials")
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid credentials",
                    headers={"WWW-Authenticate": "Bearer"},
                )

            access_token = JWTHandler.create_access_token(subject=user.email)
            log.info(f"Login successful for user: {data.email}")
            return user_models.LoginResponse(
                message="Login successful",
                user=user_models.UserRead.model_validate(user),
                access_token=access_token,
                token_type="bearer"
            )

        except HTTPException as http_exc:
            raise http_exc
        except Exception as e:
            log.error(f"Error during login for {data.email}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Server error during login"
            )

'''
API endpoints for user registration and login.
'''
from typing import Annotated, Any
from fastapi import APIRouter, Depends, status

from ..models import user as user_models
from ..services.user_service import UserService

class UsersAPI:
    """
    A class to encapsulate registration and login endpoints.
    """
    def __init__(self):
        self.router = APIRouter(tags=["Users"])
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
            "/users",
            self.register_user,
            methods=["POST"],
            status_code=status.HTTP_201_CREATED,
            response_model=user_models.UserCreated,
            summary="Register User"
        )
        self.router.add_api_route(
            "/login",
            self.login,
            methods=["POST"],
            response_model=user_models.LoginResponse,
            summary="Login"
        )

    async def register_user(
        self,
        user_data: user_models.UserCreate,
        user_service: Annotated[UserService, Depends(UserService)]
    ) -> Any:
        """
        Registers a new user. The password is stored as a bcrypt hash.
        """
        return await user_service.register_user(user_data)

    async def login(
        self,
        credentials: user_models.UserLogin,
        user_service: Annotated[UserService, Depends(UserService)]
    ) -> Any:
        """
        Verifies email and password and returns the user with an access token.
        """
        return await user_service.login_user(credentials)

# Create an instance of the class and export its router
users_api = UsersAPI()
router = users_api.router

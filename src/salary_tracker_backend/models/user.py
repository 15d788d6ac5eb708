'''

'''
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class UserCreate(BaseModel):
    """
    Validates the JSON payload when registering a user.
    """
    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    """
    Public view of a user. The password hash is never included.
    """
    id: UUID
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserCreated(BaseModel):
    message: str
    inserted_id: UUID

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginResponse(BaseModel):
    message: str
    user: UserRead
    access_token: str
    token_type: str

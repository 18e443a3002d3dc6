from typing import List

from pydantic import BaseModel, Field

from shared.core.schemas import CamelModel


# passwords are compared verbatim, so no input sanitizing here
class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=255)


class CurrentUserOut(CamelModel):
    id: str
    username: str
    role: str
    permissions: List[str] = []


class LoginResponse(CamelModel):
    message: str
    user: CurrentUserOut

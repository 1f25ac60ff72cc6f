from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..users.models import UserOut


class TokenClaims(BaseModel):
    username: str
    issued_at: datetime
    expires_at: Optional[datetime] = None


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field("", alias="Username")
    password: str = Field("", alias="Password")


class LoginResponse(BaseModel):
    user: UserOut
    token: str

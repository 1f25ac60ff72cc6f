from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """User document as stored; ``password`` holds the bcrypt hash"""
    id: str
    username: str
    password: str
    email: str
    birthday: Optional[date] = None
    favorite_movies: List[str] = Field(default_factory=list)


class UserPayload(BaseModel):
    """Registration and full-replace update body"""
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field("", alias="Username")
    password: str = Field("", alias="Password")
    email: str = Field("", alias="Email")
    birthday: Optional[date] = Field(None, alias="Birthday")


class UserOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    username: str = Field(alias="Username")
    email: str = Field(alias="Email")
    birthday: Optional[date] = Field(None, alias="Birthday")
    favorite_movies: List[str] = Field(default_factory=list, alias="FavoriteMovies")

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            birthday=user.birthday,
            favorite_movies=user.favorite_movies,
        )

from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from ..auth.dependencies import get_current_user
from ..auth.models import TokenClaims
from ..core.dependencies import get_user_service
from .models import UserOut, UserPayload
from .service import UserService

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register_user(payload: UserPayload, user_service: UserService = Depends(get_user_service)):
    """Register a new account"""
    return UserOut.from_user(await user_service.register(payload))

@router.get("", response_model=List[UserOut])
async def get_users(
    caller: TokenClaims = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    return [UserOut.from_user(user) for user in await user_service.list_users()]

@router.get("/{username}", response_model=UserOut)
async def get_user(
    username: str,
    caller: TokenClaims = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    return UserOut.from_user(await user_service.get_user(username))

@router.put("/{username}", response_model=UserOut)
async def update_user(
    username: str,
    payload: UserPayload,
    caller: TokenClaims = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Replace the caller's own account details; favorites are kept"""
    return UserOut.from_user(await user_service.update(username, payload, caller))

@router.delete("/{username}", response_class=PlainTextResponse)
async def delete_user(
    username: str,
    caller: TokenClaims = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.delete(username)

@router.post("/{username}/movies/{movie_id}", response_model=UserOut)
async def add_favorite_movie(
    username: str,
    movie_id: str,
    caller: TokenClaims = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Append a movie to the favorites list; adding it again keeps both entries"""
    return UserOut.from_user(await user_service.add_favorite(username, movie_id))

@router.delete("/{username}/movies/{movie_id}", response_model=UserOut)
async def remove_favorite_movie(
    username: str,
    movie_id: str,
    caller: TokenClaims = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Remove every occurrence of a movie from the favorites list"""
    return UserOut.from_user(await user_service.remove_favorite(username, movie_id))

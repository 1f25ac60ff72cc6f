import logging
from typing import List

from ..auth.models import TokenClaims
from ..core.exceptions import Conflict, Forbidden, NotFound
from ..core.security import DEFAULT_BCRYPT_ROUNDS, hash_password
from .models import User, UserPayload
from .repository import UserRepository
from .validation import ensure_valid_favorite_params, ensure_valid_payload

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repository: UserRepository, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.repository = repository
        self.bcrypt_rounds = bcrypt_rounds

    async def register(self, payload: UserPayload) -> User:
        ensure_valid_payload(payload)

        # Pre-check only; the reservation written by create() is what actually
        # rejects a concurrent duplicate
        if await self.repository.find_by_username(payload.username) is not None:
            raise Conflict(f"{payload.username} already exists")

        user = await self.repository.create(
            username=payload.username,
            password_hash=hash_password(payload.password, self.bcrypt_rounds),
            email=payload.email,
            birthday=payload.birthday,
        )
        logger.info(f"Registered user {user.username}")
        return user

    async def list_users(self) -> List[User]:
        return await self.repository.list_all()

    async def get_user(self, username: str) -> User:
        user = await self.repository.find_by_username(username)
        if user is None:
            raise NotFound(f"{username} was not found")
        return user

    async def update(self, username: str, payload: UserPayload, caller: TokenClaims) -> User:
        """Replace username, password, email and birthday of the caller's own account"""
        ensure_valid_payload(payload)
        if caller.username != username:
            raise Forbidden("Permission denied")

        if payload.username != username and await self.repository.find_by_username(payload.username) is not None:
            raise Conflict(f"{payload.username} already exists")

        user = await self.repository.replace(
            current_username=username,
            username=payload.username,
            password_hash=hash_password(payload.password, self.bcrypt_rounds),
            email=payload.email,
            birthday=payload.birthday,
        )
        if user is None:
            raise NotFound(f"{username} was not found")
        return user

    async def delete(self, username: str) -> str:
        if not await self.repository.delete_by_username(username):
            raise NotFound(f"{username} was not found")
        logger.info(f"Deleted user {username}")
        return f"{username} was deleted."

    async def add_favorite(self, username: str, movie_id: str) -> User:
        """Append ``movie_id``; the list is not a set, repeats are kept"""
        ensure_valid_favorite_params(username, movie_id)
        user = await self.repository.push_favorite(username, movie_id)
        if user is None:
            raise NotFound(f"{username} was not found")
        return user

    async def remove_favorite(self, username: str, movie_id: str) -> User:
        """Remove every occurrence of ``movie_id``"""
        ensure_valid_favorite_params(username, movie_id)
        user = await self.repository.pull_favorite(username, movie_id)
        if user is None:
            raise NotFound(f"{username} was not found")
        return user

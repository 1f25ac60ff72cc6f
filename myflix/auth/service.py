import logging

from ..core.config import Settings
from ..core.exceptions import Unauthorized
from ..core.security import verify_password
from ..users.models import UserOut
from ..users.repository import UserRepository
from .models import LoginResponse
from .tokens import issue_token

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect username or password."


class AuthService:
    def __init__(self, repository: UserRepository, settings: Settings):
        self.repository = repository
        self.settings = settings

    async def login(self, username: str, password: str) -> LoginResponse:
        user = await self.repository.find_by_username(username) if username else None
        if user is None:
            logger.info(f"Login failed for unknown user {username!r}")
            raise Unauthorized(INVALID_CREDENTIALS)

        if not verify_password(password, user.password):
            logger.info(f"Login failed for {username}: bad password")
            raise Unauthorized(INVALID_CREDENTIALS)

        return LoginResponse(
            user=UserOut.from_user(user),
            token=issue_token(user.username, self.settings),
        )

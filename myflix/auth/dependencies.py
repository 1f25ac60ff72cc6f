from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.config import Settings
from ..core.dependencies import get_app_settings, get_user_repository
from ..core.exceptions import Unauthorized
from ..users.repository import UserRepository
from .models import TokenClaims
from .service import AuthService
from .tokens import verify_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> TokenClaims:
    """Resolve the caller from the bearer token; no store lookup involved"""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Missing bearer token")
    return verify_token(credentials.credentials, settings)


def get_auth_service(
    repository: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(repository, settings)

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from .dependencies import get_auth_service
from .models import LoginRequest, LoginResponse
from .service import AuthService

router = APIRouter(tags=["auth"])

@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: Optional[LoginRequest] = Body(None),
    username: Optional[str] = Query(None, alias="Username"),
    password: Optional[str] = Query(None, alias="Password"),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Exchange username and password for a bearer token.

    Credentials are read from the JSON body, or from the query string.
    """
    if credentials is not None:
        username, password = credentials.username, credentials.password
    return await auth_service.login(username or "", password or "")

# Authentication Feature - Router

from fastapi import APIRouter, Depends

from medportal.features.auth.dependencies import get_auth_service
from medportal.features.auth.schemas import LoginRequest, LoginResponse
from medportal.features.auth.service import AuthService


router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate a receptionist or doctor and return an access token.

    - **username**: Staff username
    - **password**: Staff password

    The token is valid for 72 hours and must be sent as
    `Authorization: Bearer <token>` on every other endpoint.
    """
    token = await auth_service.login(login_data.username, login_data.password)
    return LoginResponse(token=token)

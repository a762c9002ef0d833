"""
Auth router.

POST /login          - SSO email check
POST /manual-login   - email + password
"""
from fastapi import APIRouter, Depends

from app.core.cache import ResponseCache
from app.dependencies import get_cache, get_repository
from app.gateway.repository import OutreachRepository
from app.schemas.auth import LoginProfileOut, LoginRequest, ManualLoginRequest, ManualLoginResponse
from app.schemas.common import SuccessResponse
from app.services.auth import login as check_login
from app.services.auth import manual_login as check_manual_login

router = APIRouter(tags=["auth"])


@router.post(
    "/login",
    response_model=SuccessResponse,
    summary="Check that an email belongs to an active account",
    responses={
        400: {"description": "Email missing."},
        403: {"description": "Account is not active."},
        404: {"description": "Account not found."},
    },
)
def login(
    payload: LoginRequest,
    repo: OutreachRepository = Depends(get_repository),
    cache: ResponseCache = Depends(get_cache),
):
    check_login(payload.email or "", repo, cache)
    return SuccessResponse()


@router.post(
    "/manual-login",
    response_model=ManualLoginResponse,
    summary="Log in with email and password",
    responses={
        400: {"description": "Email or password missing."},
        401: {"description": "Incorrect password."},
        403: {"description": "Account is not active."},
        404: {"description": "Account not found."},
    },
)
def manual_login(
    payload: ManualLoginRequest,
    repo: OutreachRepository = Depends(get_repository),
):
    profile = check_manual_login(payload.email or "", payload.password or "", repo)
    return ManualLoginResponse(
        pic_info=LoginProfileOut(full_name=profile.full_name, email=profile.email),
    )

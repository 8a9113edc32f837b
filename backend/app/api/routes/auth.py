import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.api.deps import get_app_settings
from app.core.config import Settings
from app.core.security import authenticate_admin, create_access_token
from app.schemas.auth import LoginRequest, Token
from app.services.rate_limit import enforce_login_rate_limit

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=Token)
def login(
    payload: LoginRequest,
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Token:
    enforce_login_rate_limit(
        request,
        user_id=payload.userId,
        limit=settings.login_rate_limit_max_requests,
        window_seconds=settings.login_rate_limit_window_seconds,
    )
    if not authenticate_admin(payload.userId, payload.password):
        logger.info("Rejected login for %s", payload.userId)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    logger.info("Admin %s logged in", payload.userId)
    return Token(token=create_access_token(payload.userId), userId=payload.userId)

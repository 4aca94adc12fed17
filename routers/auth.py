from fastapi import APIRouter, HTTPException, Depends, Request

from core.config import settings
from core.logging_config import logger
from core.rate_limiter import require_rate_limit, get_rate_limit_identifier
from core.security import create_access_token, verify_password
from dependencies.auth import get_current_user, get_storage
from models.auth import LoginRequest, TokenResponse, VerifyResponse
from models.user import UserRead
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/auth",
    tags=["Auth"],
)


# ============================================================
# LOGIN
# ============================================================
@router.post("/login", response_model=TokenResponse, summary="Authenticate user")
def login(
    payload: LoginRequest,
    request: Request,
    storage: Storage = Depends(get_storage),
):
    username = payload.username.strip()

    require_rate_limit(
        request,
        identifier=get_rate_limit_identifier(request, scope=username.lower()),
        max_requests=settings.LOGIN_RATE_LIMIT,
        window_seconds=settings.LOGIN_RATE_WINDOW_SECONDS,
    )

    user = storage.get_user_by_username(username)
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.warning(f"Login attempt failed for {username}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    storage.create_audit_log(user.id, "login", f"{user.name} logged in")

    return TokenResponse(
        token=create_access_token(user.id, user.role),
        user=UserRead.model_validate(user),
    )


# ============================================================
# VERIFY TOKEN
# ============================================================
@router.get("/verify", response_model=VerifyResponse, summary="Validate bearer token")
def verify(current_user: User = Depends(get_current_user)):
    return VerifyResponse(user=UserRead.model_validate(current_user))

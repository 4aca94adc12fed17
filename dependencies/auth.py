from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from core.logging_config import logger
from core.security import decode_access_token
from storage.base import Storage
from storage.tables import User


bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# Storage (injected at app creation)
# ============================================================
def get_storage(request: Request) -> Storage:
    return request.app.state.storage


# ============================================================
# AUTH DECODING (signed JWT → stored user)
# ============================================================
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    storage: Storage = Depends(get_storage),
) -> User:
    """
    The token only carries the user id; role and property are re-read from
    storage on every request so privilege changes apply immediately.
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None or not credentials.credentials:
        raise unauthorized

    try:
        claims = decode_access_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise unauthorized

    user_id = claims.get("sub")
    if not user_id:
        raise unauthorized

    user = storage.get_user(user_id)
    if user is None:
        raise unauthorized
    return user


# ============================================================
# ROLE CHECKER (basic role list guard)
# ============================================================
def requires_role(allowed_roles: list[str]):
    def checker(current_user: User = Depends(get_current_user)):
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=403,
                detail="Insufficient permissions",
            )
        return current_user
    return checker

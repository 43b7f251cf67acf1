# backend/verdanta/core/auth.py

import jwt
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from verdanta.core.config import settings

# auto_error=False so a missing header is reported as 401 instead of 403
security = HTTPBearer(auto_error=False)

VIEWER_ROLE = "viewer"


# ------------------------------------------------
# TOKEN CREATION / DECODING
# ------------------------------------------------
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expires_delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = datetime.utcnow() + expires_delta
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str):
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    return payload


# ------------------------------------------------
# SESSION DEPENDENCIES
# ------------------------------------------------
async def require_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)):
    """
    Returns the decoded session payload:
    - sub / user_id
    - role
    Raises 401 when no bearer token is supplied.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return decode_access_token(credentials.credentials)


async def require_editor(user=Depends(require_user)):
    """Session that may create records; viewers are refused."""
    role = str(user.get("role", "")).lower()
    if role == VIEWER_ROLE:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user

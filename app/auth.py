"""
Identity provider adapter: a bearer JWT whose `sub` claim is the stable user id.
Users themselves live with the provider; the ledger only stores the id.
"""
from datetime import datetime, timedelta
from jose import JWTError, jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import get_settings
from app.errors import Unauthenticated
from app.schemas.auth import TokenPayload

security = HTTPBearer(auto_error=False)


def create_access_token(user_id: str, expires_minutes: int = 60) -> str:
    settings = get_settings()
    expire = datetime.utcnow() + timedelta(minutes=expires_minutes)
    payload = {
        "sub": user_id,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str) -> TokenPayload | None:
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
        )
        return TokenPayload(
            sub=payload["sub"],
            exp=payload["exp"],
        )
    except (JWTError, KeyError):
        return None


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    if not credentials:
        raise Unauthenticated("Not authenticated")

    payload = decode_token(credentials.credentials)
    if not payload or not payload.sub:
        raise Unauthenticated("Invalid or expired token")

    return payload.sub

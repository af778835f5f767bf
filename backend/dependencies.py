from fastapi import Depends, HTTPException, Cookie, Header, status
from typing import Iterable, Optional
import jwt
from datetime import datetime, timedelta, timezone
import os
from dotenv import load_dotenv #for .env files

from models import Role

load_dotenv()

JWT_ALGORITHM = "HS256"   # ensures the token issued by trusted party(Using a shared secret) and has not been changed suring transit.
JWT_EXPIRATION_MINUTES = int(os.getenv("JWT_EXPIRATION_MINUTES", 15))
JWT_SECRET = os.getenv("SECRET_KEY", "your_default_jwt_secret_key")


def create_jwt_token(user_id: int, user_email: str, roles: Iterable[Role],
                     expires_in_minutes: int = JWT_EXPIRATION_MINUTES) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_in_minutes)
    payload = {
        "user_id": user_id,
        "sub": user_email,  # sub means subject, token will had this info
        "roles": sorted(Role(r).value for r in roles),
        "exp": expire,
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def get_current_user(authorization: Optional[str] = Header(None),
                     access_token_cookie: Optional[str] = Cookie(None),
                     refresh_token_cookie: Optional[str] = Cookie(None)) -> dict:
    """Resolve the request's credentials into {"user_id", "email", "roles"}.

    The roles come from the token, a user holding both APPLICANT and EMPLOYER gets both.
    """
    token_value = None
    if authorization:
        if authorization.startswith('Bearer '):
            token_value = authorization.split(' ', 1)[1]
        else:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail='Invalid authenticaton scheme in header'
            )
    elif access_token_cookie:
        token_value = access_token_cookie
    elif refresh_token_cookie:
        # refresh tokens are only accepted by the refresh endpoint
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token expired.Please refresh"
        )
    else:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not Authenticated: No token provided"
        )
    try:
        payload = jwt.decode(token_value, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Access token expired.Please refresh.'
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Access Token"
        )

    user_id = payload.get("user_id")
    user_email = payload.get("sub")
    if user_id is None or user_email is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing UserId/UserEmail")
    try:
        roles = {Role(r) for r in payload.get("roles", [])}
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid role in token")
    return {"user_id": user_id, "email": user_email, "roles": roles}


def require_roles(*allowed: Role):
    """Dependency factory: the principal must hold at least one of `allowed`."""
    def checker(user: dict = Depends(get_current_user)) -> dict:
        if not user["roles"] & set(allowed):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {' or '.join(r.value for r in allowed)}",
            )
        return user
    return checker

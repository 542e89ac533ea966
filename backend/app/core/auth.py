import logging

import jwt
from app.core.config import settings
from app.db.store import MatchStore, get_match_store
from fastapi import Depends, Header, HTTPException, status

logger = logging.getLogger(__name__)


def get_current_user_id(authorization: str = Header(None)) -> str:
    """
    Extract and verify the user ID from a Supabase JWT token.
    The frontend sends the access token in the Authorization header.
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    # Extract token from "Bearer <token>" format
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        payload = jwt.decode(
            parts[1],
            settings.SUPABASE_JWT_SECRET,
            algorithms=["HS256"],
            audience=settings.SUPABASE_JWT_AUDIENCE,
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: no user ID",
        )

    return user_id


def require_admin(
    user_id: str = Depends(get_current_user_id),
    store: MatchStore = Depends(get_match_store),
) -> str:
    """Dependency that only lets admin users through. Returns the user ID."""
    if not store.is_admin(user_id):
        logger.warning(f"User {user_id} denied admin access")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Admin access required",
        )

    return user_id

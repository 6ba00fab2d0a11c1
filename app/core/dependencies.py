from datetime import datetime
from typing import Optional, Tuple

from dateutil.parser import parse as parse_date

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dates import day_bounds, resolve_range
from app.core.security import decode_token
from app.models.user import User


def get_current_user(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(None)
) -> User:
    """
    Récupère l'utilisateur depuis le JWT du header Authorization.

    Partagé par tous les routers protégés.
    """
    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    token = authorization.replace("Bearer ", "")
    user_id = decode_token(token)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return user


def parse_range_or_400(start_date: Optional[str], end_date: Optional[str], default_days: int) -> Tuple:
    try:
        return resolve_range(start_date, end_date, default_days)
    except (ValueError, OverflowError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid date range")


def parse_day_bound_or_400(value: Optional[str], end_of_day: bool = False) -> Optional[datetime]:
    """Début (ou fin) du jour d'une date passée en query string, None si absente."""
    if not value:
        return None
    try:
        bounds = day_bounds(parse_date(value))
    except (ValueError, OverflowError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid date: {value}")
    return bounds[1] if end_of_day else bounds[0]

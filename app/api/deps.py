# app/api/deps.py
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import Forbidden, Unauthorized
from app.domain.identity import Identity
from app.services.cart_service import CartService
from app.services.lock_service import LockService
from app.services.notification_service import NotificationService, Notifier
from app.services.order_service import OrderService

# Tozsamosc ustawia warstwa auth przed serwisem (gateway / reverse proxy):
#   X-Session-Id - token sesji anonimowej (koszyk)
#   X-User-Id, X-User-Role - zalogowany uzytkownik, opcjonalnie


def get_session_id(x_session_id: str = Header(..., min_length=1, max_length=255)) -> str:
    return x_session_id


def get_identity(
    x_user_id: Optional[int] = Header(None),
    x_user_role: Optional[str] = Header(None),
) -> Identity:
    return Identity(user_id=x_user_id, role=x_user_role)


def require_identity(identity: Identity = Depends(get_identity)) -> Identity:
    try:
        identity.check_authenticated()
    except Unauthorized as e:
        raise HTTPException(status_code=401, detail=str(e))
    return identity


def require_admin(identity: Identity = Depends(require_identity)) -> Identity:
    try:
        identity.check_admin()
    except Forbidden as e:
        raise HTTPException(status_code=403, detail=str(e))
    return identity


@lru_cache
def get_lock_service() -> LockService:
    return LockService()


def get_notifier() -> Notifier:
    return NotificationService()


def get_cart_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
) -> CartService:
    return CartService(db=db, lock_service=lock_service)


def get_order_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    notifier: Notifier = Depends(get_notifier),
) -> OrderService:
    return OrderService(db=db, lock_service=lock_service, notifier=notifier)

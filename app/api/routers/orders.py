# app/api/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_order_service, get_session_id, require_identity, require_admin
from app.domain.errors import CartBusy, NotFound, Unauthorized
from app.domain.identity import Identity
from app.domain.schemas import OrderCreate, OrderOut, OrderStatusPatch
from app.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    session_id: str = Depends(get_session_id),
    identity: Identity = Depends(require_identity),
    svc: OrderService = Depends(get_order_service),
):
    """
    Tworzy zamówienie z koszyka sesji.
    Wysyła powiadomienie asynchronicznie.
    """
    try:
        return svc.place_order(
            session_id=session_id,
            user_id=identity.user_id,
            customer=payload.customer(),
            shipping=payload.shipping(),
            billing=payload.billing(),
            notes=payload.notes,
        )
    except Unauthorized as e:
        raise HTTPException(status_code=401, detail=str(e))
    except CartBusy as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        # EmptyCart, ProductUnavailable, InvalidInput
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[OrderOut])
def list_orders(
    identity: Identity = Depends(require_identity),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_orders(identity)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    identity: Identity = Depends(require_identity),
    svc: OrderService = Depends(get_order_service),
):
    """
    Pobiera szczegóły zamówienia.
    """
    try:
        return svc.get_order(identity, order_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusPatch,
    identity: Identity = Depends(require_admin),
    svc: OrderService = Depends(get_order_service),
):
    try:
        return svc.update_status(order_id, payload.status)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        # InvalidStatus, InvalidTransition
        raise HTTPException(status_code=400, detail=str(e))

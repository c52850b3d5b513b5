#app/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_cart_service, get_session_id
from app.domain.errors import CartBusy, InvalidInput, NotFound
from app.domain.schemas import (
    CartLineIn,
    CartLineUpdate,
    CartLineOut,
    CartTotalOut,
    CartLineRemovedOut,
    CartClearedOut,
)
from app.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=list[CartLineOut])
def get_cart(
    session_id: str = Depends(get_session_id),
    svc: CartService = Depends(get_cart_service),
):
    return svc.get_lines(session_id)


@router.get("/total", response_model=CartTotalOut)
def get_cart_total(
    session_id: str = Depends(get_session_id),
    svc: CartService = Depends(get_cart_service),
):
    return {"total": svc.total(session_id)}


@router.post("", response_model=CartLineOut, status_code=201)
def add_item(
    payload: CartLineIn,
    session_id: str = Depends(get_session_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_line(session_id, payload.product_id, payload.quantity)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CartBusy as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/{line_id}", response_model=CartLineOut)
def update_item(
    line_id: int,
    payload: CartLineUpdate,
    session_id: str = Depends(get_session_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.update_quantity(session_id, line_id, payload.quantity)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CartBusy as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{line_id}", response_model=CartLineRemovedOut)
def remove_item(
    line_id: int,
    session_id: str = Depends(get_session_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return {"removed": svc.remove_line(session_id, line_id)}
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CartBusy as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("", response_model=CartClearedOut)
def clear_cart(
    session_id: str = Depends(get_session_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return {"removed": svc.clear(session_id)}
    except CartBusy as e:
        raise HTTPException(status_code=409, detail=str(e))

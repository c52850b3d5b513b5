# app/api/routers/products.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.data.database import get_db
from app.data.models.product import ProductModel
from app.domain.identity import Identity
from app.domain.schemas import ProductIn, ProductUpdate, ProductOut
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=list[ProductOut])
def list_products(
    section: Optional[Literal["retail", "wholesale"]] = Query(None),
    db: Session = Depends(get_db),
):
    return ProductRepo(db).list_products(section)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = ProductRepo(db).get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductIn,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    product = ProductRepo(db).create_product(ProductModel(**payload.model_dump()))
    logger.info(f"Product {product.id} created by user {identity.user_id}")
    return product


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    # zmiana ceny nie dotyka zlozonych juz zamowien (pozycje maja swoja cene)
    changes = payload.model_dump(exclude_unset=True)
    product = ProductRepo(db).update_product(product_id, changes)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    logger.info(f"Product {product_id} updated by user {identity.user_id}: {sorted(changes)}")
    return product


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    # soft delete, zamowienia dalej wskazuja na produkt
    product = ProductRepo(db).update_product(product_id, {"is_active": False})
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    logger.info(f"Product {product_id} deactivated by user {identity.user_id}")
    return {"message": "Product deleted successfully"}

# app/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.schemas import ProductOut
from app.domain.validation import MAX_ID
from app.repos.product_repo import ProductRepo

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return ProductRepo(db).list_products()


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int = Path(..., gt=0, le=MAX_ID), db: Session = Depends(get_db)):
    product = ProductRepo(db).get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

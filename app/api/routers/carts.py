#app/api/routers/carts.py
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.exceptions import (
    CartBusy,
    CartConflict,
    CartNotFound,
    ProductNotFound,
    ProductNotFoundInCart,
    QuantityOutOfRange,
)
from app.domain.validation import MAX_ID
from app.domain.schemas import (
    AddItemToCartRequest,
    UpdateCartItemRequest,
    CartItemOut,
    CartOut,
)
from app.services.cart_service import CartService
from app.services.lock_service import LockService, get_lock_service

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    return CartService(db=db, lock_service=lock_service)


@router.post("", response_model=CartOut, status_code=201)
def create_cart(request: Request, response: Response, svc: CartService = Depends(get_service)):
    cart = svc.create_cart()
    response.headers["Location"] = str(request.url_for("get_cart", cart_id=str(cart["id"])))
    return cart


@router.get("/{cart_id}", response_model=CartOut)
def get_cart(cart_id: UUID, svc: CartService = Depends(get_service)):
    try:
        return svc.get_cart(cart_id)
    except CartNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{cart_id}/items", response_model=CartItemOut, status_code=201)
def add_item(
    cart_id: UUID,
    payload: AddItemToCartRequest,
    svc: CartService = Depends(get_service),
):
    try:
        return svc.add_item(cart_id, payload.product_id)
    except CartNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (ProductNotFound, QuantityOutOfRange) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (CartConflict, CartBusy) as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/{cart_id}/items/{product_id}", response_model=CartItemOut)
def update_item(
    cart_id: UUID,
    payload: UpdateCartItemRequest,
    product_id: int = Path(..., gt=0, le=MAX_ID),
    svc: CartService = Depends(get_service),
):
    try:
        return svc.update_item(cart_id, product_id, payload.quantity)
    except (CartNotFound, ProductNotFoundInCart) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except QuantityOutOfRange as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (CartConflict, CartBusy) as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{cart_id}/items/{product_id}", status_code=204, response_class=Response)
def remove_item(
    cart_id: UUID,
    product_id: int = Path(..., gt=0, le=MAX_ID),
    svc: CartService = Depends(get_service),
):
    try:
        svc.remove_item(cart_id, product_id)
    except CartNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (CartConflict, CartBusy) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return Response(status_code=204)


@router.delete("/{cart_id}/items", status_code=204, response_class=Response)
def clear_cart(cart_id: UUID, svc: CartService = Depends(get_service)):
    try:
        svc.clear_cart(cart_id)
    except CartNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (CartConflict, CartBusy) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return Response(status_code=204)

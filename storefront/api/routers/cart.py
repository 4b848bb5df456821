#storefront/api/routers/cart.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_session_context, get_lock_service
from storefront.data.database import get_db
from storefront.domain.errors import NotFound, CartBusy, LockUnavailable
from storefront.domain.schemas import CartOut, QuantityIn
from storefront.services.cart_service import CartService
from storefront.services.lock_service import LockService
from storefront.services.session_context import SessionContext

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
    lock_service: LockService = Depends(get_lock_service),
) -> CartService:
    return CartService(db=db, ctx=ctx, lock_service=lock_service)


@router.get("", response_model=CartOut)
def get_cart(svc: CartService = Depends(get_service)):
    return svc.get_cart()


@router.post("/items/{product_id}", response_model=CartOut)
def add_item(product_id: int, svc: CartService = Depends(get_service)):
    try:
        return svc.add_product(product_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except LockUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except CartBusy as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/items/{product_id}", response_model=CartOut)
def set_quantity(product_id: int, payload: QuantityIn, svc: CartService = Depends(get_service)):
    try:
        return svc.set_quantity(product_id, payload.quantity)
    except LockUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except CartBusy as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(product_id: int, svc: CartService = Depends(get_service)):
    try:
        return svc.remove_product(product_id)
    except LockUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except CartBusy as e:
        raise HTTPException(status_code=409, detail=str(e))

# storefront/api/routers/orders.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from storefront.api.deps import get_session_context, get_lock_service
from storefront.data.database import get_db
from storefront.domain.errors import (
    CartBusy,
    CheckoutFailed,
    EmptyCart,
    LockUnavailable,
    NotFound,
    Unauthenticated,
    Unauthorized,
)
from storefront.domain.schemas import OrderOut
from storefront.services.checkout_service import CheckoutService
from storefront.services.lock_service import LockService
from storefront.services.order_service import OrderService
from storefront.services.session_context import SessionContext

router = APIRouter(tags=["orders"])


@router.post("/checkout", response_model=OrderOut, status_code=201)
def checkout(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Places an order from the session cart.
    An empty cart sends the client back to /cart instead of failing; products
    that left the catalog are dropped from the cart and reported with 409.
    """
    svc = CheckoutService(db=db, ctx=ctx, lock_service=lock_service)
    try:
        return svc.checkout()
    except Unauthorized as e:
        raise HTTPException(status_code=401, detail=str(e))
    except EmptyCart:
        return RedirectResponse(url="/cart", status_code=303)
    except NotFound as e:
        raise HTTPException(status_code=409, detail=str(e))
    except LockUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except CartBusy as e:
        raise HTTPException(status_code=409, detail=str(e))
    except CheckoutFailed as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/orders", response_model=List[OrderOut])
def my_orders(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    try:
        return OrderService(db, ctx).list_my_orders()
    except Unauthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.get("/orders/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    try:
        return OrderService(db, ctx).get_order(order_id)
    except Unauthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Unauthorized as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

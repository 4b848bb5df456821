# storefront/api/routers/admin.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_session_context, require_role
from storefront.data.database import get_db
from storefront.domain.errors import (
    InvalidStatusTransition,
    NotFound,
    Unauthorized,
    ValidationFailed,
)
from storefront.domain.schemas import AdminDashboardOut, OrderOut, SellerCreate, StatusIn, UserRead
from storefront.services.order_service import OrderService
from storefront.services.session_context import SessionContext
from storefront.services.user_service import UserService

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_role("admin"))],
)


@router.get("/dashboard", response_model=AdminDashboardOut)
def dashboard(db: Session = Depends(get_db)):
    return UserService(db).admin_overview()


@router.post("/sellers", response_model=UserRead, status_code=201)
def add_seller(payload: SellerCreate, db: Session = Depends(get_db)):
    try:
        return UserService(db).create_seller(payload)
    except ValidationFailed as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/orders/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    payload: StatusIn,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    try:
        return OrderService(db, ctx).update_status(order_id, payload.status, required_role="admin")
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Unauthorized as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationFailed as e:
        raise HTTPException(status_code=400, detail=str(e))

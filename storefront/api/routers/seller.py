# storefront/api/routers/seller.py
from decimal import Decimal
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from storefront.api.deps import get_session_context, get_storage, require_role
from storefront.data.database import get_db
from storefront.domain.errors import (
    InvalidStatusTransition,
    NotFound,
    Unauthorized,
    ValidationFailed,
)
from storefront.domain.schemas import OrderOut, ProductOut, SellerDashboardOut, StatusIn
from storefront.services.order_service import OrderService
from storefront.services.product_service import ProductService
from storefront.services.session_context import SessionContext
from storefront.services.storage import DiskStorage

router = APIRouter(
    prefix="/seller",
    tags=["seller"],
    dependencies=[Depends(require_role("seller"))],
)


@router.get("/dashboard", response_model=SellerDashboardOut)
def dashboard(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return {
        "products": ProductService(db).list_owned(ctx),
        "orders": OrderService(db, ctx).list_seller_orders(),
    }


@router.post("/products", response_model=ProductOut, status_code=201)
def create_product(
    name: str = Form(...),
    price: Decimal = Form(...),
    description: str | None = Form(None),
    stock: int = Form(0),
    image: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
    storage: DiskStorage = Depends(get_storage),
):
    svc = ProductService(db, storage=storage)
    try:
        return svc.create_product(
            ctx,
            name=name,
            price=price,
            description=description,
            stock=stock,
            image_name=image.filename if image else None,
            image_stream=image.file if image else None,
        )
    except ValidationFailed as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Unauthorized as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.delete("/products/{product_id}", status_code=204)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
    storage: DiskStorage = Depends(get_storage),
):
    try:
        ProductService(db, storage=storage).delete_product(ctx, product_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Unauthorized as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.post("/orders/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    payload: StatusIn,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    try:
        return OrderService(db, ctx).update_status(order_id, payload.status, required_role="seller")
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Unauthorized as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationFailed as e:
        raise HTTPException(status_code=400, detail=str(e))

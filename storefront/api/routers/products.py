# storefront/api/routers/products.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import NotFound
from storefront.domain.schemas import ProductOut, HomeOut
from storefront.services.product_service import ProductService

router = APIRouter(tags=["products"])


@router.get("/", response_model=HomeOut)
def home(db: Session = Depends(get_db)):
    return ProductService(db).home()


@router.get("/products", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return ProductService(db).list_products()


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    try:
        return ProductService(db).get_product(product_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

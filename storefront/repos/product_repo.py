# storefront/repos/product_repo.py
from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session
from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self) -> List[ProductModel]:
        return list(self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars())

    def list_newest(self, limit: int) -> List[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
                .limit(limit)
            ).scalars()
        )

    def list_by_owner(self, owner_id: int) -> List[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel).where(ProductModel.owner_id == owner_id).order_by(ProductModel.id)
            ).scalars()
        )

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()

    def rollback(self):
        self.db.rollback()

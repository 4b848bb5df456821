# storefront/services/product_service.py
from decimal import Decimal
from typing import BinaryIO, Dict, Any, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import NotFound, Unauthorized, ValidationFailed
from storefront.domain.schemas import ProductOut
from storefront.repos.product_repo import ProductRepo
from storefront.services.role_gate import RoleGate
from storefront.services.session_context import SessionContext
from storefront.services.storage import DiskStorage
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

FEATURED_COUNT = 5


class ProductService:
    def __init__(self, db: Session, storage: DiskStorage | None = None):
        self.repo = ProductRepo(db)
        self.storage = storage or DiskStorage()

    #queries
    def list_products(self) -> List[ProductOut]:
        return [ProductOut.model_validate(p) for p in self.repo.list_products()]

    def home(self) -> Dict[str, Any]:
        return {
            "products": self.list_products(),
            "featured": [ProductOut.model_validate(p) for p in self.repo.list_newest(FEATURED_COUNT)],
        }

    def get_product(self, product_id: int) -> ProductOut:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")
        return ProductOut.model_validate(product)

    def list_owned(self, ctx: SessionContext) -> List[ProductOut]:
        user = ctx.require_user()
        return [ProductOut.model_validate(p) for p in self.repo.list_by_owner(user.id)]

    #commands, seller only
    def create_product(
        self,
        ctx: SessionContext,
        name: str,
        price: Decimal,
        description: str | None = None,
        stock: int = 0,
        image_name: str | None = None,
        image_stream: BinaryIO | None = None,
    ) -> ProductOut:
        user = ctx.require_user()
        if not RoleGate.authorize(ctx, "seller"):
            raise Unauthorized("Only sellers can add products")

        if not name.strip():
            raise ValidationFailed("Product name is required")
        if price < 0:
            raise ValidationFailed("Price cannot be negative")
        if stock < 0:
            raise ValidationFailed("Stock cannot be negative")

        image = None
        if image_name and image_stream is not None:
            image = self.storage.save(image_name, image_stream)

        try:
            created = self.repo.create_product(
                ProductModel(
                    name=name.strip(),
                    description=description,
                    price=price,
                    stock=stock,
                    image=image,
                    owner_id=user.id,
                )
            )
        except SQLAlchemyError as e:
            self.repo.rollback()
            self.storage.delete(image)
            logger.error(f"Product for seller {user.id} not saved, upload {image} removed: {e}")
            raise
        logger.info(f"Seller {user.id} added product {created.id}")
        return ProductOut.model_validate(created)

    def delete_product(self, ctx: SessionContext, product_id: int) -> None:
        user = ctx.require_user()
        if not RoleGate.authorize(ctx, "seller"):
            raise Unauthorized("Only sellers can delete products")

        product = self.repo.get_product(product_id)
        #someone else's product looks the same as a missing one
        if not product or (product.owner_id != user.id and user.role != RoleGate.ADMIN):
            raise NotFound("Product not found")

        image = product.image
        self.repo.delete_product(product)
        self.storage.delete(image)
        logger.info(f"Product {product_id} deleted by user {user.id}")

#all models imported here so SQLAlchemy registers them in Base.metadata

from storefront.data.models.user import UserModel
from storefront.data.models.product import ProductModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_line import OrderLineModel
from storefront.data.models.session_cart import SessionCartModel

__all__ = ["UserModel", "ProductModel", "OrderModel", "OrderLineModel", "SessionCartModel"]

#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from shop.data.models.user import UserModel
from shop.data.models.category import CategoryModel
from shop.data.models.product import ProductModel
from shop.data.models.order import OrderModel
from shop.data.models.order_detail import OrderDetailModel, OrderDetailProductModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "ProductModel",
    "OrderModel",
    "OrderDetailModel",
    "OrderDetailProductModel",
]

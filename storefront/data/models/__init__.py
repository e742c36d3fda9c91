#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w Base.metadata

from storefront.data.models.user import UserModel
from storefront.data.models.cart_line import CartLineModel
from storefront.data.models.order import OrderModel

__all__ = ["UserModel", "CartLineModel", "OrderModel"]

#import all models so SQLAlchemy registers them in Base.metadata

from bazar.data.models.user import UserModel
from bazar.data.models.product import ProductModel
from bazar.data.models.cart import CartModel, CART_TYPE
from bazar.data.models.item import ItemModel
from bazar.data.models.address import AddressModel
from bazar.data.models.shipping import ShippingModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartModel",
    "CART_TYPE",
    "ItemModel",
    "AddressModel",
    "ShippingModel",
]

# bazar/repos/cart_repo.py
from datetime import datetime
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bazar.data.models.address import AddressModel
from bazar.data.models.cart import CartModel, CART_TYPE
from bazar.data.models.item import ItemModel
from bazar.data.models.shipping import ShippingModel


class CartRepo:
    """
    Data access for carts and the rows they own polymorphically.
    Nothing here commits except create_cart; the service decides
    when a unit of work ends.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_expired_carts(self, cutoff: datetime) -> List[CartModel]:
        return list(
            self.db.execute(
                select(CartModel).where(CartModel.updated_at < cutoff).order_by(CartModel.id)
            ).scalars()
        )

    #line items
    def get_cart_items(self, cart_id: int) -> List[ItemModel]:
        return list(
            self.db.execute(
                select(ItemModel)
                .where(ItemModel.itemable_type == CART_TYPE, ItemModel.itemable_id == cart_id)
                .order_by(ItemModel.id)
            ).scalars()
        )

    def get_cart_item(self, cart_id: int, product_id: int) -> ItemModel | None:
        return self.db.execute(
            select(ItemModel).where(
                ItemModel.itemable_type == CART_TYPE,
                ItemModel.itemable_id == cart_id,
                ItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: ItemModel) -> ItemModel:
        item.itemable_type = CART_TYPE
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, cart_id: int, product_id: int) -> int:
        result = self.db.execute(
            delete(ItemModel).where(
                ItemModel.itemable_type == CART_TYPE,
                ItemModel.itemable_id == cart_id,
                ItemModel.product_id == product_id,
            )
        )
        return result.rowcount

    #address / shipping, one row per cart
    def get_address(self, cart_id: int) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(
                AddressModel.addressable_type == CART_TYPE,
                AddressModel.addressable_id == cart_id,
            )
        ).scalar_one_or_none()

    def save_address(self, cart_id: int, data: dict) -> AddressModel:
        address = self.get_address(cart_id)
        if address is None:
            address = AddressModel(addressable_type=CART_TYPE, addressable_id=cart_id)
            self.db.add(address)

        for key, value in data.items():
            setattr(address, key, value)

        self.db.flush()
        return address

    def get_shipping(self, cart_id: int) -> ShippingModel | None:
        return self.db.execute(
            select(ShippingModel).where(
                ShippingModel.shippable_type == CART_TYPE,
                ShippingModel.shippable_id == cart_id,
            )
        ).scalar_one_or_none()

    def save_shipping(self, cart_id: int, data: dict) -> ShippingModel:
        shipping = self.get_shipping(cart_id)
        if shipping is None:
            shipping = ShippingModel(shippable_type=CART_TYPE, shippable_id=cart_id)
            self.db.add(shipping)

        for key, value in data.items():
            setattr(shipping, key, value)

        self.db.flush()
        return shipping

    def delete_cart(self, cart: CartModel) -> None:
        """
        Delete the cart and every row it owns. Runs inside the caller's
        transaction, commit/rollback is up to the caller.
        """
        self.db.execute(
            delete(ItemModel).where(
                ItemModel.itemable_type == CART_TYPE,
                ItemModel.itemable_id == cart.id,
            )
        )
        self.db.execute(
            delete(AddressModel).where(
                AddressModel.addressable_type == CART_TYPE,
                AddressModel.addressable_id == cart.id,
            )
        )
        self.db.execute(
            delete(ShippingModel).where(
                ShippingModel.shippable_type == CART_TYPE,
                ShippingModel.shippable_id == cart.id,
            )
        )
        self.db.delete(cart)
        self.db.flush()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

from datetime import datetime, timezone, timedelta
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bazar.data.models.cart import CartModel
from bazar.data.models.item import ItemModel
from bazar.domain.schemas import (
    AddressIn,
    AddressOut,
    CartItemOut,
    CartOut,
    DiscountIn,
    LineItemIn,
    ShippingIn,
    ShippingOut,
)
from bazar.repos.cart_repo import CartRepo
from bazar.repos.product_repo import ProductRepo
from bazar.repos.user_repo import UserRepo
from bazar.utils.settings import CART_EXPIRATION, DEFAULT_CURRENCY
from bazar.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use cases of the cart domain.

    Commands (create, attach, detach, discount, user, address, shipping,
    delete) change state and end their own unit of work; get_cart only
    reads. Totals are never stored, they come from the line item
    snapshots every time the cart is read.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    #query
    def get_cart(self, cart_id: int) -> Dict[str, Any] | None:
        cart = self.repo.get_cart(cart_id)

        if not cart:
            return None

        return self._to_dict(cart)

    #commands
    def create_cart(
        self,
        user_id: int | None = None,
        currency: str | None = None,
        discount: Decimal | int = 0,
    ) -> Dict[str, Any]:
        if user_id is not None and not self.users.get_user(user_id):
            raise ValueError(f"User {user_id} does not exist")

        discount = DiscountIn(discount=discount).discount

        cart = self.repo.create_cart(
            CartModel(
                user_id=user_id,
                currency=(currency or DEFAULT_CURRENCY).upper(),
                discount=discount,
            )
        )

        logger.info(f"Created cart {cart.id} for user {user_id}")

        return self._to_dict(cart)

    def attach_product(
        self,
        cart_id: int,
        product_id: int,
        price: Decimal,
        tax: Decimal,
        quantity: int,
    ) -> Dict[str, Any]:
        """
        Record a line item snapshot. The given price and tax are stored
        as they are, the product's catalog price is never read, so later
        price changes do not move the cart totals.
        """
        line = LineItemIn(product_id=product_id, price=price, tax=tax, quantity=quantity)

        cart = self._get_or_fail(cart_id)

        if not self.products.get_product(line.product_id):
            raise ValueError(f"Product {line.product_id} does not exist")

        existing_item = self.repo.get_cart_item(cart_id, line.product_id)

        if existing_item:
            logger.info(
                f"Product {line.product_id} already in cart {cart_id}, quantity "
                f"{existing_item.quantity} -> {existing_item.quantity + line.quantity}"
            )
            existing_item.quantity += line.quantity
            existing_item.price = line.price
            existing_item.tax = line.tax
        else:
            logger.info(f"Attaching product {line.product_id} to cart {cart_id}")
            self.repo.add_cart_item(
                ItemModel(
                    itemable_id=cart_id,
                    product_id=line.product_id,
                    price=line.price,
                    tax=line.tax,
                    quantity=line.quantity,
                )
            )

        self._touch(cart)
        self.repo.commit()

        return self.get_cart(cart_id)

    def detach_product(self, cart_id: int, product_id: int) -> Dict[str, Any]:
        cart = self._get_or_fail(cart_id)

        removed = self.repo.delete_cart_item(cart_id, product_id)
        if not removed:
            raise ValueError(f"Product {product_id} is not in cart {cart_id}")

        self._touch(cart)
        self.repo.commit()

        logger.info(f"Detached product {product_id} from cart {cart_id}")

        return self.get_cart(cart_id)

    def set_discount(self, cart_id: int, discount: Decimal | int) -> Dict[str, Any]:
        cart = self._get_or_fail(cart_id)

        cart.discount = DiscountIn(discount=discount).discount
        self._touch(cart)
        self.repo.commit()

        return self.get_cart(cart_id)

    def associate_user(self, cart_id: int, user_id: int) -> Dict[str, Any]:
        cart = self._get_or_fail(cart_id)

        user = self.users.get_user(user_id)
        if not user:
            raise ValueError(f"User {user_id} does not exist")

        cart.user = user
        self._touch(cart)
        self.repo.commit()

        logger.info(f"Cart {cart_id} now belongs to user {user_id}")

        return self.get_cart(cart_id)

    def dissociate_user(self, cart_id: int) -> Dict[str, Any]:
        cart = self._get_or_fail(cart_id)

        cart.user = None
        self._touch(cart)
        self.repo.commit()

        return self.get_cart(cart_id)

    def set_address(self, cart_id: int, payload: AddressIn) -> Dict[str, Any]:
        cart = self._get_or_fail(cart_id)

        self.repo.save_address(cart_id, payload.model_dump())
        self._touch(cart)
        self.repo.commit()

        return self.get_cart(cart_id)

    def set_shipping(self, cart_id: int, payload: ShippingIn) -> Dict[str, Any]:
        cart = self._get_or_fail(cart_id)

        self.repo.save_shipping(cart_id, payload.model_dump())
        self._touch(cart)
        self.repo.commit()

        return self.get_cart(cart_id)

    def delete_cart(self, cart_id: int) -> None:
        """
        Delete the cart together with its line items, address and
        shipping in a single transaction. Either everything goes or
        nothing does; database errors are re-raised after the rollback.
        """
        cart = self._get_or_fail(cart_id)

        try:
            self.repo.delete_cart(cart)
            self.repo.commit()
        except SQLAlchemyError as e:
            logger.error(f"Deleting cart {cart_id} failed, rolling back: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Deleted cart {cart_id} with its items, address and shipping")

    def clear_expired_carts(
        self,
        now: datetime | None = None,
        expiration: int | None = None,
    ) -> int:
        """Delete carts not updated within the expiration window, returns how many went."""
        now = now or datetime.now(timezone.utc)
        expiration = CART_EXPIRATION if expiration is None else expiration
        cutoff = now - timedelta(seconds=expiration)

        cart_ids = [cart.id for cart in self.repo.get_expired_carts(cutoff)]
        logger.info(f"Found {len(cart_ids)} expired carts")

        deleted = 0
        for cart_id in cart_ids:
            try:
                self.delete_cart(cart_id)
                deleted += 1
            except SQLAlchemyError as e:
                logger.warning(f"Failed to delete expired cart {cart_id}: {e}")

        return deleted

    def _get_or_fail(self, cart_id: int) -> CartModel:
        cart = self.repo.get_cart(cart_id)

        if not cart:
            raise ValueError(f"Cart {cart_id} does not exist")

        return cart

    @staticmethod
    def _touch(cart: CartModel):
        cart.updated_at = datetime.now(timezone.utc)

    @staticmethod
    def _to_dict(cart: CartModel) -> Dict[str, Any]:
        return CartOut(
            cart_id=cart.id,
            user_id=cart.user_id,
            currency=cart.currency,
            discount=cart.discount,
            items=[
                CartItemOut(
                    product_id=i.product_id,
                    price=i.price,
                    tax=i.tax,
                    quantity=i.quantity,
                )
                for i in cart.items
            ],
            address=AddressOut.model_validate(cart.address) if cart.address else None,
            shipping=ShippingOut.model_validate(cart.shipping) if cart.shipping else None,
            total=cart.total,
            net_total=cart.net_total,
            tax=cart.tax,
            updated_at=cart.updated_at,
        ).model_dump()

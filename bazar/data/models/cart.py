#bazar/data/models/cart.py
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric
from sqlalchemy.orm import relationship

from bazar.data.database import Base
from bazar.utils.settings import DEFAULT_CURRENCY

#owner type stored in addressable_type / shippable_type / itemable_type
CART_TYPE = "cart"
CENT = Decimal("0.01")


def _utcnow():
    return datetime.now(timezone.utc)


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    currency = Column(String(3), nullable=False, default=DEFAULT_CURRENCY)
    discount = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    user = relationship("UserModel")

    # polymorphic children are written through CartRepo only, hence viewonly
    address = relationship(
        "AddressModel",
        primaryjoin=(
            "and_(foreign(AddressModel.addressable_id) == CartModel.id, "
            f"AddressModel.addressable_type == '{CART_TYPE}')"
        ),
        uselist=False,
        viewonly=True,
    )
    shipping = relationship(
        "ShippingModel",
        primaryjoin=(
            "and_(foreign(ShippingModel.shippable_id) == CartModel.id, "
            f"ShippingModel.shippable_type == '{CART_TYPE}')"
        ),
        uselist=False,
        viewonly=True,
    )
    items = relationship(
        "ItemModel",
        primaryjoin=(
            "and_(foreign(ItemModel.itemable_id) == CartModel.id, "
            f"ItemModel.itemable_type == '{CART_TYPE}')"
        ),
        order_by="ItemModel.id",
        viewonly=True,
    )

    @property
    def products(self):
        return [item.product for item in self.items]

    @property
    def total(self) -> Decimal:
        """Sum of (price + tax) * quantity over the line items, minus the discount."""
        total = sum((item.total for item in self.items), Decimal("0.00"))
        return (total - self._discount()).quantize(CENT)

    @property
    def net_total(self) -> Decimal:
        total = sum((item.net_total for item in self.items), Decimal("0.00"))
        return (total - self._discount()).quantize(CENT)

    @property
    def tax(self) -> Decimal:
        return sum((item.tax * item.quantity for item in self.items), Decimal("0.00")).quantize(CENT)

    def _discount(self) -> Decimal:
        return Decimal(self.discount) if self.discount is not None else Decimal("0.00")

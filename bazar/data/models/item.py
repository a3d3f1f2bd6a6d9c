from decimal import Decimal

from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from bazar.data.database import Base


class ItemModel(Base):
    """
    Line item of a cart: a snapshot of the product price and tax taken
    when the product was attached. Owned polymorphically through
    (itemable_type, itemable_id).
    """
    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    itemable_type = Column(String(50), nullable=False)
    itemable_id = Column(Integer, nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    price = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    quantity = Column(Integer, nullable=False)

    product = relationship("ProductModel")

    __table_args__ = (
        UniqueConstraint("itemable_type", "itemable_id", "product_id", name="u_item_owner_product"),
    )

    @property
    def total(self) -> Decimal:
        return (self.price + self.tax) * self.quantity

    @property
    def net_total(self) -> Decimal:
        return self.price * self.quantity

from decimal import Decimal

from sqlalchemy import Column, Integer, String, Numeric, UniqueConstraint

from bazar.data.database import Base


class ShippingModel(Base):
    __tablename__ = "shippings"

    id = Column(Integer, primary_key=True)
    shippable_type = Column(String(50), nullable=False)
    shippable_id = Column(Integer, nullable=False)

    driver = Column(String(50), nullable=False, default="local-pickup")
    cost = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    tax = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))

    __table_args__ = (
        UniqueConstraint("shippable_type", "shippable_id", name="u_shipping_owner"),
    )

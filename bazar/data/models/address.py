from sqlalchemy import Column, Integer, String, UniqueConstraint

from bazar.data.database import Base


class AddressModel(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    addressable_type = Column(String(50), nullable=False)
    addressable_id = Column(Integer, nullable=False)

    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    company = Column(String, nullable=True)
    country = Column(String(2), nullable=True)
    state = Column(String, nullable=True)
    city = Column(String, nullable=True)
    postcode = Column(String(20), nullable=True)
    address = Column(String, nullable=True)
    address_secondary = Column(String, nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String, nullable=True)

    #one address per owner
    __table_args__ = (
        UniqueConstraint("addressable_type", "addressable_id", name="u_address_owner"),
    )

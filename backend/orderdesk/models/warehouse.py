from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from orderdesk.db.base import Base
from orderdesk.models.mixins import LookupMixin


class Warehouse(Base, LookupMixin):
    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True, comment="Name")
    address = Column(String(200), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    state = Column(String(50), nullable=False, index=True)
    zip_code = Column(String(20), nullable=False)
    phone = Column(String(30))
    email = Column(String(255))
    capacity = Column(Integer, comment="Storage capacity")

    customer_links = relationship("CustomerWarehouse", back_populates="warehouse")
    orders = relationship("Order", back_populates="warehouse")

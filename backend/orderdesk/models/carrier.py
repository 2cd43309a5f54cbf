from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from orderdesk.db.base import Base
from orderdesk.models.mixins import LookupMixin


class Carrier(Base, LookupMixin):
    __tablename__ = "carriers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, comment="Name")

    services = relationship("CarrierService", back_populates="carrier", order_by="CarrierService.name")


class CarrierService(Base, LookupMixin):
    """Service level offered by a carrier, e.g. ground or 2nd day air"""
    __tablename__ = "carrier_services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, comment="Name")
    description = Column(String(500))
    carrier_id = Column(Integer, ForeignKey("carriers.id"), nullable=False, index=True)

    carrier = relationship("Carrier", back_populates="services")

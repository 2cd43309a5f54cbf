from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from orderdesk.db.base import Base
from orderdesk.models.mixins import LookupMixin


class Material(Base, LookupMixin):
    """Inventory line item owned by a project"""
    __tablename__ = "materials"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=False, index=True, comment="Material code")
    description = Column(String(500), comment="Description")
    uom = Column(String(10), nullable=False, default="EA", comment="Unit of measure")
    available_quantity = Column(Integer, nullable=False, default=0, comment="Available quantity")
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)

    project = relationship("Project", back_populates="materials")
    order_items = relationship("OrderItem", back_populates="material")

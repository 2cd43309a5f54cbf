"""Customers, their projects and their warehouse links"""

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from orderdesk.core.constants import Status
from orderdesk.db.base import Base
from orderdesk.models.mixins import AuditMixin, LookupMixin


class Customer(Base, LookupMixin):
    """Tenant owning projects, users and orders"""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True, comment="Name")
    address = Column(String(200), nullable=False, comment="Street address")
    city = Column(String(100), nullable=False)
    state = Column(String(50), nullable=False)
    zip_code = Column(String(20), nullable=False)
    phone = Column(String(30))
    email = Column(String(255))

    projects = relationship("Project", back_populates="customer", order_by="Project.id")
    users = relationship("User", back_populates="customer", order_by="User.id")
    warehouse_links = relationship("CustomerWarehouse", back_populates="customer")
    orders = relationship("Order", back_populates="customer")
    accounts = relationship("Account", back_populates="customer")

    @property
    def default_project(self):
        return next((p for p in self.projects if p.is_default), None)


class Project(Base, LookupMixin):
    """Grouping of materials under a customer"""
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, comment="Name")
    description = Column(String(500))
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    is_default = Column(Boolean, nullable=False, default=False, comment="Default project of the customer")

    customer = relationship("Customer", back_populates="projects")
    materials = relationship("Material", back_populates="project")


class CustomerWarehouse(Base, AuditMixin):
    """Which warehouses a customer may use"""
    __tablename__ = "customer_warehouses"
    __table_args__ = (UniqueConstraint("customer_id", "warehouse_id", name="uq_customer_warehouse"),)

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    status = Column(Integer, nullable=False, default=Status.ACTIVE)

    customer = relationship("Customer", back_populates="warehouse_links")
    warehouse = relationship("Warehouse", back_populates="customer_links")

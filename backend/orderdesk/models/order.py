"""Orders, their items and order types"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from orderdesk.core.constants import OrderStatus, Status, STATUS_NAMES
from orderdesk.db.base import Base
from orderdesk.models.mixins import AuditMixin, LookupMixin


class OrderType(Base, LookupMixin):
    __tablename__ = "order_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500))


class Order(Base, LookupMixin):
    """Shipment request of a customer"""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    status = Column(Integer, nullable=False, default=OrderStatus.DRAFT, comment="Order lifecycle status")
    order_number = Column(String(20), unique=True, index=True, nullable=False, comment="ORDyymmddNNNN")
    order_type_id = Column(Integer, ForeignKey("order_types.id"), nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    ship_to_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    bill_to_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    carrier_id = Column(Integer, ForeignKey("carriers.id"), nullable=False)
    carrier_service_id = Column(Integer, ForeignKey("carrier_services.id"), nullable=False)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id", ondelete="SET NULL"), nullable=True, index=True)
    expected_delivery_date = Column(DateTime, nullable=False, comment="Expected delivery date")

    order_type = relationship("OrderType")
    customer = relationship("Customer", back_populates="orders")
    ship_to_account = relationship("Account", foreign_keys=[ship_to_account_id])
    bill_to_account = relationship("Account", foreign_keys=[bill_to_account_id])
    carrier = relationship("Carrier")
    carrier_service = relationship("CarrierService")
    warehouse = relationship("Warehouse", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    @property
    def status_display(self):
        return STATUS_NAMES.get(self.status, str(self.status))

    @property
    def is_draft(self):
        return self.status == OrderStatus.DRAFT

    @property
    def item_count(self):
        return len(self.items)

    @property
    def total_quantity(self):
        return sum(item.quantity or 0 for item in self.items)


class OrderItem(Base, AuditMixin):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    material_id = Column(Integer, ForeignKey("materials.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, comment="Ordered quantity")
    status = Column(Integer, nullable=False, default=Status.ACTIVE)

    order = relationship("Order", back_populates="items")
    material = relationship("Material", back_populates="order_items")

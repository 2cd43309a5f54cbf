from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from orderdesk.core.constants import Role, Status
from orderdesk.db.base import Base
from orderdesk.models.mixins import LookupMixin


class User(Base, LookupMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False, comment="Login email")
    password = Column(String(255), nullable=False, comment="bcrypt hash")
    role = Column(String(20), nullable=False, default=Role.CLIENT, comment="ADMIN or CLIENT")
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True, index=True)

    customer = relationship("Customer", back_populates="users")

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @property
    def is_active(self):
        return self.status == Status.ACTIVE

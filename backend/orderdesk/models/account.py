from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from orderdesk.core.constants import AccountType
from orderdesk.db.base import Base
from orderdesk.models.mixins import LookupMixin


class Account(Base, LookupMixin):
    """Named ship-to and/or bill-to address of a customer"""
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, comment="Name")
    address = Column(String(200), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(50), nullable=False)
    zip_code = Column(String(20), nullable=False)
    phone = Column(String(30))
    email = Column(String(255))
    contact_name = Column(String(100))
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    account_type = Column(String(20), nullable=False, default=AccountType.SHIP_TO, comment="SHIP_TO, BILL_TO or BOTH")

    customer = relationship("Customer", back_populates="accounts")

    @property
    def can_ship_to(self):
        return self.account_type in (AccountType.SHIP_TO, AccountType.BOTH)

    @property
    def can_bill_to(self):
        return self.account_type in (AccountType.BILL_TO, AccountType.BOTH)

from sqlalchemy import Column, Integer, String

from orderdesk.db.base import Base
from orderdesk.models.mixins import AuditMixin


class StatusCode(Base, AuditMixin):
    """Catalog entry for the shared status codes"""
    __tablename__ = "statuses"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(Integer, unique=True, nullable=False, comment="Status code")
    name = Column(String(50), nullable=False, comment="Name")
    description = Column(String(200), comment="Description")
    entity = Column(String(50), comment="Entity the code applies to")

"""Columns shared by every table"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime

from orderdesk.core.constants import Status


class AuditMixin:
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, comment="Created at")
    created_by = Column(Integer, nullable=True, comment="Creating user id")
    modified_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="Modified at")
    modified_by = Column(Integer, nullable=True, comment="Modifying user id")


class LookupMixin(AuditMixin):
    lookup_code = Column(String(50), unique=True, index=True, nullable=False, comment="Human readable code")
    status = Column(Integer, nullable=False, default=Status.ACTIVE, comment="Status code")

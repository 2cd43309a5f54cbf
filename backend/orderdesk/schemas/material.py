"""Material schemas"""
from typing import List, Optional
from datetime import datetime

from orderdesk.schemas.base import ApiModel, Pagination


class MaterialInput(ApiModel):
    lookup_code: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    uom: Optional[str] = None
    available_quantity: Optional[int] = None
    project_id: Optional[int] = None
    status: Optional[int] = None


class MaterialSummary(ApiModel):
    id: int
    lookup_code: str
    code: str
    description: Optional[str] = None
    uom: str
    available_quantity: int
    status: int
    project_id: int
    project_name: str = ""
    customer_id: Optional[int] = None
    customer_name: str = ""
    order_count: int = 0


class MaterialProject(ApiModel):
    id: int
    lookup_code: str
    name: str
    customer_id: int


class MaterialOrderHistory(ApiModel):
    order_id: int
    order_number: str
    status: int
    quantity: int
    created_at: datetime


class MaterialDetail(MaterialSummary):
    created_at: datetime
    modified_at: datetime
    project: Optional[MaterialProject] = None
    order_history: List[MaterialOrderHistory] = []


class MaterialListResponse(ApiModel):
    materials: List[MaterialSummary]
    pagination: Pagination


class MaterialSearchResponse(ApiModel):
    materials: List[MaterialSummary]


class UomListResponse(ApiModel):
    uoms: List[str]

"""Warehouse schemas"""
from typing import List, Optional
from datetime import datetime

from orderdesk.schemas.base import ApiModel


class WarehouseBase(ApiModel):
    lookup_code: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    capacity: Optional[int] = None
    status: Optional[int] = None
    customer_ids: Optional[List[int]] = None


class WarehouseCreate(WarehouseBase):
    pass


class WarehouseUpdate(WarehouseBase):
    pass


class WarehouseCustomer(ApiModel):
    id: int
    lookup_code: str
    name: str


class WarehouseResponse(ApiModel):
    id: int
    lookup_code: str
    name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: Optional[str] = None
    email: Optional[str] = None
    capacity: Optional[int] = None
    status: int
    created_at: datetime
    modified_at: datetime
    order_count: int = 0
    customer_count: int = 0
    customers: List[WarehouseCustomer] = []


class WarehouseListResponse(ApiModel):
    warehouses: List[WarehouseResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class WarehouseDeactivatedResponse(ApiModel):
    message: str
    warehouse: WarehouseResponse


class CapacityStats(ApiModel):
    total: int = 0
    average: float = 0
    max: int = 0
    min: int = 0


class StateCount(ApiModel):
    state: str
    count: int


class WarehouseOrderCount(ApiModel):
    warehouse_id: int
    lookup_code: str
    name: str
    order_count: int


class WarehouseStatsResponse(ApiModel):
    active_warehouses: int
    capacity: CapacityStats
    by_state: List[StateCount]
    recent_orders: List[WarehouseOrderCount]

"""Order schemas"""
from typing import Any, List, Optional
from datetime import datetime

from pydantic import field_validator

from orderdesk.schemas.base import ApiModel, Pagination


class OrderItemInput(ApiModel):
    material_id: Optional[int] = None
    quantity: Optional[int] = None


class OrderBase(ApiModel):
    order_type_id: Optional[int] = None
    ship_to_account_id: Optional[int] = None
    bill_to_account_id: Optional[int] = None
    carrier_id: Optional[int] = None
    carrier_service_id: Optional[int] = None
    warehouse_id: Optional[int] = None
    expected_delivery_date: Optional[datetime] = None

    @field_validator("expected_delivery_date", mode="before")
    @classmethod
    def accept_plain_date(cls, v: Any) -> Any:
        """Date pickers send ``YYYY-MM-DD``"""
        if isinstance(v, str) and len(v) == 10:
            return datetime.strptime(v, "%Y-%m-%d")
        return v


class OrderCreate(OrderBase):
    items: List[OrderItemInput] = []


class OrderUpdate(OrderBase):
    """``items`` replaces the current items when present"""
    items: Optional[List[OrderItemInput]] = None


class OrderAccount(ApiModel):
    id: int
    lookup_code: str
    name: str
    address: str
    city: str
    state: str
    zip_code: str


class OrderItemResponse(ApiModel):
    id: int
    material_id: int
    material_code: str = ""
    material_description: Optional[str] = None
    uom: str = ""
    quantity: int
    status: int


class OrderSummary(ApiModel):
    id: int
    order_number: str
    lookup_code: str
    status: int
    status_display: str = ""
    customer_id: int
    customer_name: str = ""
    carrier_name: str = ""
    expected_delivery_date: datetime
    created_at: datetime
    item_count: int = 0
    total_quantity: int = 0


class OrderResponse(OrderSummary):
    order_type_id: int
    order_type_name: str = ""
    ship_to_account: Optional[OrderAccount] = None
    bill_to_account: Optional[OrderAccount] = None
    carrier_id: int
    carrier_service_id: int
    carrier_service_name: str = ""
    warehouse_id: Optional[int] = None
    warehouse_name: str = ""
    modified_at: datetime
    items: List[OrderItemResponse] = []


class OrderListResponse(ApiModel):
    orders: List[OrderSummary]
    pagination: Pagination


class StatusCount(ApiModel):
    status: int
    name: str
    count: int


class MonthCount(ApiModel):
    month: str
    count: int


class CarrierUsage(ApiModel):
    carrier_id: int
    name: str
    count: int


class MaterialUsage(ApiModel):
    material_id: int
    code: str
    description: Optional[str] = None
    total_quantity: int
    order_count: int


class OrderStatsResponse(ApiModel):
    total_orders: int
    by_status: List[StatusCount]
    by_month: List[MonthCount]
    top_carriers: List[CarrierUsage]
    top_materials: List[MaterialUsage]


class OrderTypeResponse(ApiModel):
    id: int
    lookup_code: str
    name: str
    description: Optional[str] = None


class OrderTypeListResponse(ApiModel):
    order_types: List[OrderTypeResponse]

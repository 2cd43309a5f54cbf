"""Carrier and carrier service schemas"""
from typing import List, Optional

from orderdesk.schemas.base import ApiModel


class CarrierServiceResponse(ApiModel):
    id: int
    lookup_code: str
    name: str
    description: Optional[str] = None
    carrier_id: int
    status: int


class CarrierResponse(ApiModel):
    id: int
    lookup_code: str
    name: str
    status: int
    services: List[CarrierServiceResponse] = []


class CarrierListResponse(ApiModel):
    carriers: List[CarrierResponse]


class CarrierServiceListResponse(ApiModel):
    services: List[CarrierServiceResponse]


class CarrierInput(ApiModel):
    lookup_code: Optional[str] = None
    name: Optional[str] = None
    status: Optional[int] = None


class CarrierServiceInput(ApiModel):
    lookup_code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[int] = None

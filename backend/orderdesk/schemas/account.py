"""Ship-to / bill-to account schemas"""
from typing import List, Optional

from orderdesk.schemas.base import ApiModel


class AccountCreate(ApiModel):
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    contact_name: Optional[str] = None
    account_type: Optional[str] = None


class AccountResponse(ApiModel):
    id: int
    lookup_code: str
    name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: Optional[str] = None
    email: Optional[str] = None
    contact_name: Optional[str] = None
    customer_id: int
    account_type: str
    status: int


class AddressListResponse(ApiModel):
    addresses: List[AccountResponse]

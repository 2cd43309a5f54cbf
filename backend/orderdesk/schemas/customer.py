"""Customer wizard schemas: basic info, projects, users"""
from typing import List, Optional
from datetime import datetime

from orderdesk.schemas.base import ApiModel


class ProjectInput(ApiModel):
    id: Optional[int] = None
    lookup_code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    is_default: bool = False
    status: Optional[int] = None


class CustomerUserInput(ApiModel):
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    status: Optional[int] = None


class CustomerBase(ApiModel):
    lookup_code: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    status: Optional[int] = None


class CustomerCreate(CustomerBase):
    projects: List[ProjectInput] = []
    users: List[CustomerUserInput] = []


class CustomerUpdate(CustomerBase):
    """Lists replace the current ones when present"""
    projects: Optional[List[ProjectInput]] = None
    users: Optional[List[CustomerUserInput]] = None


class ProjectResponse(ApiModel):
    id: int
    lookup_code: str
    name: str
    description: Optional[str] = None
    customer_id: int
    is_default: bool
    status: int


class CustomerUserResponse(ApiModel):
    id: int
    lookup_code: str
    email: str
    role: str
    status: int


class CustomerResponse(ApiModel):
    id: int
    lookup_code: str
    name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: Optional[str] = None
    email: Optional[str] = None
    status: int
    created_at: datetime
    modified_at: datetime
    projects: List[ProjectResponse] = []
    users: List[CustomerUserResponse] = []
    project_count: int = 0
    user_count: int = 0


class CustomerListResponse(ApiModel):
    customers: List[CustomerResponse]

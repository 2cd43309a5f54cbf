"""Shared schema base: camelCase on the wire, snake_case in Python"""
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(ApiModel):
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, total_pages=(total + limit - 1) // limit if limit else 0)


class StatusItem(ApiModel):
    code: int
    name: str
    description: str = ""
    entity: str = ""


class StatusListResponse(ApiModel):
    statuses: List[StatusItem]

from math import ceil
from pydantic import BaseModel
from typing import Generic, TypeVar

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, items, total: int, page: int, limit: int):
        return cls(items=items, total=total, page=page, limit=limit, pages=ceil(total / limit))

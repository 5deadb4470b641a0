"""
Shared schema base and the APIResponse envelope.
Wire shapes are camelCase with `_id`, matching what the frontend reads.
"""
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ContractModel(BaseModel):
    """Base for every wire shape: camelCase aliases, built from ORM rows or dicts."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class Pagination(ContractModel):
    current: int = 1
    total: int = 1
    count: int
    total_items: int

    @classmethod
    def single_page(cls, n: int) -> "Pagination":
        return cls(count=n, total_items=n)


class APIResponse(ContractModel, Generic[T]):
    """{ success, data, message? } envelope used by every JSON route."""

    success: bool = True
    data: T | None = None
    message: str | None = None

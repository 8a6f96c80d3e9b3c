"""
Parameter models shared by the catalog tools.
"""

from typing import List, Literal

from pydantic import BaseModel, Field


class EntityFilter(BaseModel):
    key: str
    values: List[str] = Field(default_factory=list)


class EntityOrder(BaseModel):
    field: str
    order: Literal["asc", "desc"] = "asc"

from typing import List

from pydantic import BaseModel, ConfigDict

from schemas.base import CamelModel


class CategoryBase(CamelModel):
    id: int
    name: str
    description: str


class CategoryListOutput(BaseModel):
    model_config = ConfigDict(extra='ignore')

    total: int
    items: List[CategoryBase]


class LocationBase(CamelModel):
    id: int
    address: str
    city: str

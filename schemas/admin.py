import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from schemas.base import CamelModel
from schemas.catalog import CategoryBase, LocationBase
from schemas.property import PropertyBase
from schemas.reservation import ReportReservation


class SellerReservationCount(CamelModel):
    seller_id: int
    seller_name: str
    count: int


class MonthRevenue(CamelModel):
    month: str = Field(examples=['2026-01'])
    revenue: str = Field(examples=['300.00'])


class AdminMetrics(CamelModel):
    total_reservations: int
    reservations_per_seller: List[SellerReservationCount]
    revenue_by_month: List[MonthRevenue]


class ReservationsReport(CamelModel):
    from_: datetime.datetime = Field(alias='from')
    to: datetime.datetime
    count: int
    items: List[ReportReservation]


class SellerProperty(PropertyBase):
    location: LocationBase
    category: CategoryBase


class SellerWithProperties(CamelModel):
    id: int
    name: str
    email: str
    properties: List[SellerProperty]


class SellersOutput(BaseModel):
    model_config = ConfigDict(extra='ignore')

    sellers: List[SellerWithProperties]

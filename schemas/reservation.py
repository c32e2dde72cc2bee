import datetime
from decimal import Decimal

from pydantic import Field, field_validator, model_validator
from typing_extensions import Self

from db.models import ReservationStatus
from schemas.base import CamelModel, MAX_ID
from schemas.catalog import CategoryBase, LocationBase
from schemas.property import PropertyBase
from schemas.user import UserSummary, UserContact


def to_naive_utc(value: datetime.datetime) -> datetime.datetime:
    """
    시간대 정보가 있는 일시는 UTC로 변환한 뒤 시간대 정보를 제거합니다. DB에는 UTC 기준 일시만 저장합니다.
    """
    if value.tzinfo is not None:
        return value.astimezone(datetime.UTC).replace(tzinfo=None)

    return value


class ReservationBase(CamelModel):
    id: int
    start_date: datetime.datetime
    end_date: datetime.datetime
    total_price: Decimal
    status: ReservationStatus
    buyer_id: int
    property_id: int


class ReservationProperty(PropertyBase):
    location: LocationBase
    category: CategoryBase
    seller: UserSummary


class ReservationWithProperty(ReservationBase):
    property: ReservationProperty


class SellerReservationProperty(PropertyBase):
    location: LocationBase
    category: CategoryBase


class SellerReservation(ReservationBase):
    property: SellerReservationProperty
    buyer: UserContact


class ReportReservationProperty(PropertyBase):
    location: LocationBase
    category: CategoryBase
    seller: UserContact


class ReportReservation(ReservationBase):
    property: ReportReservationProperty
    buyer: UserContact


class MakeReservationInput(CamelModel):
    property_id: int = Field(gt=0, le=MAX_ID, description='예약할 숙소의 `id`', examples=[1])
    start_date: datetime.datetime = Field(description='체크인 일시 (ISO 8601)', examples=['2026-01-10T00:00:00.000Z'])
    end_date: datetime.datetime = Field(description='체크아웃 일시 (ISO 8601)', examples=['2026-01-13T00:00:00.000Z'])

    @field_validator('start_date', 'end_date')
    @classmethod
    def normalize_timezone(cls, value: datetime.datetime) -> datetime.datetime:
        return to_naive_utc(value)

    @model_validator(mode='after')
    def validate_start_date_end_date(self) -> Self:
        if self.end_date <= self.start_date:
            raise ValueError('Start date must be before end date')

        return self


class UpdateReservationStatusInput(CamelModel):
    status: ReservationStatus = Field(description='새 예약 상태', examples=['CONFIRMED'])

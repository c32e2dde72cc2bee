import datetime
from decimal import Decimal
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Self

from db.models import ReservationStatus
from schemas.base import CamelModel, MAX_ID
from schemas.catalog import CategoryBase, LocationBase
from schemas.user import UserSummary

SORT_FIELDS = ('name', 'price', 'rooms', 'city')


class PropertyBase(CamelModel):
    id: int
    name: str
    description: str
    image: str
    price: Decimal
    rooms: int
    seller_id: int
    location_id: int
    category_id: int


class PropertyItem(PropertyBase):
    location: LocationBase
    category: CategoryBase
    seller: UserSummary


class PropertyReservation(CamelModel):
    id: int
    start_date: datetime.datetime
    end_date: datetime.datetime
    total_price: Decimal
    status: ReservationStatus
    buyer_id: int
    property_id: int


class PropertyDetail(PropertyItem):
    reservations: List[PropertyReservation]


class PropertyPage(CamelModel):
    page: int
    page_size: int
    total: int
    items: List[PropertyItem]


class PropertyListQuery(BaseModel):
    """
    숙소 목록 검색 조건입니다. 라우터에서 쿼리 파라미터를 변환한 뒤 만들어집니다.
    """
    model_config = ConfigDict(extra='ignore')

    name: Optional[str] = None
    city: Optional[str] = None
    category_id: Optional[int] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    min_rooms: Optional[int] = None
    max_rooms: Optional[int] = None
    seller_id: Optional[int] = None
    sort_by: str = 'name'
    order: str = 'asc'
    page: int = 1
    page_size: int = 10


def _validate_image_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ValueError('Image must be a valid URL')

    return value


class CreateProperty(CamelModel):
    name: str = Field(min_length=2, max_length=120, description='숙소 이름', examples=['Sunny Loft'])
    description: str = Field(min_length=10, max_length=2000, description='숙소 설명')
    image: str = Field(min_length=5, max_length=500, description='이미지 URL',
                       examples=['https://images.stayhub.com/1.jpg'])
    price: Decimal = Field(gt=0, le=99999999, description='1박 가격', examples=[100])
    rooms: int = Field(gt=0, le=100, description='방 개수', examples=[2])
    address: str = Field(min_length=3, max_length=200, description='주소', examples=['Knez Mihailova 1'])
    city: str = Field(min_length=2, max_length=80, description='도시', examples=['Belgrade'])
    category_id: int = Field(gt=0, le=MAX_ID, description='카테고리 `id`', examples=[1])

    @field_validator('image')
    @classmethod
    def validate_image(cls, value: str) -> str:
        return _validate_image_url(value)


class UpdateProperty(CamelModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=120)
    description: Optional[str] = Field(default=None, min_length=10, max_length=2000)
    image: Optional[str] = Field(default=None, min_length=5, max_length=500)
    price: Optional[Decimal] = Field(default=None, gt=0, le=99999999)
    rooms: Optional[int] = Field(default=None, gt=0, le=100)
    address: Optional[str] = Field(default=None, min_length=3, max_length=200)
    city: Optional[str] = Field(default=None, min_length=2, max_length=80)
    category_id: Optional[int] = Field(default=None, gt=0, le=MAX_ID)

    @field_validator('image')
    @classmethod
    def validate_image(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _validate_image_url(value)

    @model_validator(mode='after')
    def validate_not_empty(self) -> Self:
        if not self.changes():
            raise ValueError('At least one field must be provided')

        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)

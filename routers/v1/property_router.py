from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.params import Path
from sqlalchemy.orm import Session
from starlette import status

from auth.auth_cookie import get_optional_user, require_seller
from db.database import get_db
from db.models import Role
from schemas import property as property_schema, user
from schemas.base import OkOutput, MAX_ID
from service.property_service import PropertyService, DEFAULT_PAGE_SIZE
from util import to_number

property_router = APIRouter(
    prefix='/properties',
    tags=['숙소']
)

NOT_FOUND_RESPONSE = {
    "description": "`property_id`값을 가진 숙소가 없는 경우",
    "content": {
        "application/json": {
            "example": {"message": "Property not found"}
        }
    }
}

FORBIDDEN_RESPONSE = {
    "description": "현재 유저가 판매자가 아니거나 숙소의 주인이 아닌 경우",
    "content": {
        "application/json": {
            "example": {"message": "Forbidden"}
        }
    }
}


def _to_int(value: Optional[str]) -> Optional[int]:
    """
    DB 정수 컬럼 범위를 벗어나는 값은 숫자가 아닌 값과 같이 무시합니다.
    """
    number = to_number(value)
    if number is None or abs(number) > MAX_ID:
        return None

    return int(number)


def _or_default(value, default):
    return default if value is None else value


@property_router.get('', name='숙소 검색', response_model=property_schema.PropertyPage)
def get_properties(current_user: Annotated[Optional[user.TokenPayload], Depends(get_optional_user)],
                   db: Session = Depends(get_db),
                   name: Annotated[Optional[str], Query(description='이름에 포함된 문자열 (대소문자 구분 없음)')] = None,
                   city: Annotated[Optional[str], Query(description='도시에 포함된 문자열 (대소문자 구분 없음)')] = None,
                   category_id: Annotated[Optional[str], Query(alias='categoryId')] = None,
                   min_price: Annotated[Optional[str], Query(alias='minPrice')] = None,
                   max_price: Annotated[Optional[str], Query(alias='maxPrice')] = None,
                   min_rooms: Annotated[Optional[str], Query(alias='minRooms')] = None,
                   max_rooms: Annotated[Optional[str], Query(alias='maxRooms')] = None,
                   mine: Annotated[Optional[str], Query(description='`1`이면 현재 판매자의 숙소만 반환합니다')] = None,
                   sort_by: Annotated[Optional[str], Query(alias='sortBy', description='name / price / rooms / city')] = None,
                   order: Annotated[Optional[str], Query(description='asc / desc')] = None,
                   page: Optional[str] = None,
                   page_size: Annotated[Optional[str], Query(alias='pageSize')] = None):
    """
    숙소 목록을 검색합니다. 숫자가 아닌 검색 조건은 무시됩니다.
    `pageSize`는 1에서 50 사이로, `page`는 1 이상으로 맞춰집니다.
    `mine=1`인 경우 로그인한 판매자의 숙소만 반환하며, 판매자 세션이 없으면 빈 목록을 반환합니다.
    """
    property_service = PropertyService(db)

    seller_id = None
    if mine in ('1', 'true'):
        if current_user is None or current_user.role != Role.SELLER:
            return property_schema.PropertyPage(page=1, page_size=DEFAULT_PAGE_SIZE, total=0, items=[])
        seller_id = current_user.id

    min_price_number = to_number(min_price)
    max_price_number = to_number(max_price)

    query = property_schema.PropertyListQuery(
        name=name or None,
        city=city or None,
        category_id=_to_int(category_id),
        min_price=str(min_price_number) if min_price_number is not None else None,
        max_price=str(max_price_number) if max_price_number is not None else None,
        min_rooms=_to_int(min_rooms),
        max_rooms=_to_int(max_rooms),
        seller_id=seller_id,
        sort_by=sort_by or 'name',
        order=order or 'asc',
        page=_or_default(_to_int(page), 1),
        page_size=_or_default(_to_int(page_size), DEFAULT_PAGE_SIZE),
    )

    return property_service.get_properties(query)


@property_router.get('/{property_id}', name='숙소 상세 조회', response_model=property_schema.PropertyDetail,
                     responses={404: NOT_FOUND_RESPONSE})
def get_property(db: Session = Depends(get_db),
                 property_id: int = Path(..., gt=0, le=MAX_ID, description='조회할 숙소의 `id`')):
    """
    주소, 카테고리, 판매자 정보와 모든 예약을 포함한 숙소 상세 정보를 반환합니다.
    """
    property_service = PropertyService(db)
    return property_service.get_property(property_id)


@property_router.post('', name='숙소 등록', status_code=status.HTTP_201_CREATED,
                      response_model=property_schema.PropertyDetail, responses={
        400: {
            "description": "입력값이 유효하지 않거나 카테고리가 없는 경우",
            "content": {
                "application/json": {
                    "example": {"message": "Selected category does not exist"}
                }
            }
        },
        403: FORBIDDEN_RESPONSE
    })
def create_property(current_user: Annotated[user.TokenPayload, Depends(require_seller)],
                    new_property: property_schema.CreateProperty,
                    db: Session = Depends(get_db)):
    """
    새 숙소를 등록합니다. 주소와 숙소는 하나의 트랜잭션으로 함께 생성됩니다.
    판매자 전용 API 입니다.
    """
    property_service = PropertyService(db)
    return property_service.create_property(current_user.id, new_property)


@property_router.patch('/{property_id}', name='숙소 수정', response_model=property_schema.PropertyDetail,
                       responses={403: FORBIDDEN_RESPONSE, 404: NOT_FOUND_RESPONSE})
def update_property(current_user: Annotated[user.TokenPayload, Depends(require_seller)],
                    update_property_request: property_schema.UpdateProperty,
                    db: Session = Depends(get_db),
                    property_id: int = Path(..., gt=0, le=MAX_ID, description='수정할 숙소의 `id`')):
    """
    전달된 필드만 수정합니다. 자신의 숙소만 수정할 수 있습니다.
    """
    property_service = PropertyService(db)
    return property_service.update_property(current_user.id, property_id, update_property_request)


@property_router.delete('/{property_id}', name='숙소 삭제', response_model=OkOutput,
                        responses={403: FORBIDDEN_RESPONSE, 404: NOT_FOUND_RESPONSE})
def delete_property(current_user: Annotated[user.TokenPayload, Depends(require_seller)],
                    db: Session = Depends(get_db),
                    property_id: int = Path(..., gt=0, le=MAX_ID, description='삭제할 숙소의 `id`')):
    """
    숙소와 해당 숙소의 모든 예약, 주소를 함께 삭제합니다. 자신의 숙소만 삭제할 수 있습니다.
    """
    property_service = PropertyService(db)
    return property_service.delete_property(current_user.id, property_id)

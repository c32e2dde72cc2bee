import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session
from starlette import status

from db.models import Property
from repository.category_repository import CategoryRepository
from repository.property_repository import PropertyRepository
from schemas.base import OkOutput
from schemas.property import PropertyListQuery, PropertyPage, PropertyItem, CreateProperty, UpdateProperty, \
    SORT_FIELDS
from util import clamp

logger = logging.getLogger(__name__)

MAX_PAGE = 1_000_000
MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 10


class PropertyService:
    def __init__(self, session: Session):
        self.repository = PropertyRepository(session)
        self.category_repository = CategoryRepository(session)

    def get_properties(self, query: PropertyListQuery) -> PropertyPage:
        """
        검색 조건에 맞는 숙소 목록을 페이지 단위로 반환합니다.
        `page_size`는 [1, 50], `page`는 1 이상으로 맞추고, 알 수 없는 정렬 조건은 이름 오름차순으로 처리합니다.
        """
        query = query.model_copy(update={
            'page': clamp(query.page, 1, MAX_PAGE),
            'page_size': clamp(query.page_size, 1, MAX_PAGE_SIZE),
            'sort_by': query.sort_by if query.sort_by in SORT_FIELDS else 'name',
            'order': 'desc' if query.order == 'desc' else 'asc',
        })

        total, items = self.repository.search(query)

        return PropertyPage(page=query.page, page_size=query.page_size, total=total,
                            items=[PropertyItem.model_validate(item) for item in items])

    def get_property(self, property_id: int) -> Property:
        _property = self.repository.get_detail(property_id)

        if not _property:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Property not found')

        return _property

    def create_property(self, seller_id: int, new_property: CreateProperty) -> Property:
        if not self.category_repository.exist_by_id(new_property.category_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Selected category does not exist')

        _property = self.repository.create(seller_id, new_property)

        logger.info('Seller %s created property %s', seller_id, _property.id)
        return _property

    def update_property(self, seller_id: int, property_id: int, update_property: UpdateProperty) -> Property:
        existing = self._get_owned_property(seller_id, property_id)
        changes = update_property.changes()

        if 'category_id' in changes and not self.category_repository.exist_by_id(changes['category_id']):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Selected category does not exist')

        _property = self.repository.update(existing, changes)

        logger.info('Seller %s updated property %s: %s', seller_id, property_id, sorted(changes))
        return _property

    def delete_property(self, seller_id: int, property_id: int) -> OkOutput:
        existing = self._get_owned_property(seller_id, property_id)

        self.repository.delete(existing)

        logger.info('Seller %s deleted property %s', seller_id, property_id)
        return OkOutput(ok=True)

    def _get_owned_property(self, seller_id: int, property_id: int) -> Property:
        existing = self.repository.get_by_id(property_id)

        if not existing:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Property not found')

        if existing.seller_id != seller_id:
            logger.warning('Seller %s tried to modify property %s owned by %s', seller_id, property_id,
                           existing.seller_id)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Forbidden')

        return existing

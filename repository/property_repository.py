from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, contains_eager, joinedload, selectinload

from db.models import Property, Location, Reservation
from schemas.property import CreateProperty, PropertyListQuery

LOCATION_FIELDS = ('address', 'city')
PROPERTY_FIELDS = ('name', 'description', 'image', 'price', 'rooms', 'category_id')


def _to_price(value: Decimal) -> Decimal:
    return Decimal(value).quantize(Decimal('0.01'))


class PropertyRepository:
    def __init__(self, session: Session):
        self.session = session

    def _base_query(self):
        return self.session.query(Property) \
            .join(Property.location) \
            .options(contains_eager(Property.location),
                     joinedload(Property.category),
                     joinedload(Property.seller))

    def search(self, query: PropertyListQuery) -> Tuple[int, List[Property]]:
        q = self._base_query()

        if query.name:
            q = q.filter(Property.name.icontains(query.name.strip(), autoescape=True))
        if query.city:
            q = q.filter(Location.city.icontains(query.city.strip(), autoescape=True))
        if query.category_id:
            q = q.filter(Property.category_id == query.category_id)
        if query.seller_id:
            q = q.filter(Property.seller_id == query.seller_id)
        if query.min_rooms:
            q = q.filter(Property.rooms >= query.min_rooms)
        if query.max_rooms:
            q = q.filter(Property.rooms <= query.max_rooms)
        if query.min_price:
            q = q.filter(Property.price >= query.min_price)
        if query.max_price:
            q = q.filter(Property.price <= query.max_price)

        total = q.count()

        sort_column = {
            'price': Property.price,
            'rooms': Property.rooms,
            'city': Location.city,
        }.get(query.sort_by, Property.name)
        sort_column = sort_column.desc() if query.order == 'desc' else sort_column.asc()

        items = q.order_by(sort_column, Property.id.asc()) \
            .offset((query.page - 1) * query.page_size) \
            .limit(query.page_size) \
            .all()

        return total, items

    def get_by_id(self, _id: int) -> Optional[Property]:
        return self.session.get(Property, _id)

    def get_detail(self, _id: int) -> Optional[Property]:
        return self._base_query() \
            .options(selectinload(Property.reservations)) \
            .filter(Property.id == _id) \
            .first()

    def get_id_seller_pairs(self) -> List[Tuple[int, int]]:
        return [(row.id, row.seller_id) for row in self.session.query(Property.id, Property.seller_id).all()]

    def create(self, seller_id: int, data: CreateProperty) -> Property:
        """
        Location과 Property를 하나의 트랜잭션으로 생성합니다. 둘 중 하나라도 실패하면 모두 롤백합니다.
        """
        try:
            location = Location(address=data.address, city=data.city)
            self.session.add(location)
            self.session.flush()

            _property = Property(
                name=data.name,
                description=data.description,
                image=data.image,
                price=_to_price(data.price),
                rooms=data.rooms,
                seller_id=seller_id,
                location_id=location.id,
                category_id=data.category_id,
            )
            self.session.add(_property)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        return self.get_detail(_property.id)

    def update(self, _property: Property, changes: dict) -> Property:
        try:
            for key in LOCATION_FIELDS:
                if key in changes:
                    setattr(_property.location, key, changes[key])

            for key in PROPERTY_FIELDS:
                if key in changes:
                    value = _to_price(changes[key]) if key == 'price' else changes[key]
                    setattr(_property, key, value)

            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        return self.get_detail(_property.id)

    def delete(self, _property: Property):
        """
        FK 제약을 지키기 위해 예약 -> 숙소 -> 주소 순서로 하나의 트랜잭션에서 삭제합니다.
        """
        location_id = _property.location_id
        try:
            self.session.query(Reservation) \
                .filter(Reservation.property_id == _property.id) \
                .delete(synchronize_session=False)
            self.session.delete(_property)
            self.session.flush()

            self.session.query(Location).filter(Location.id == location_id).delete(synchronize_session=False)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

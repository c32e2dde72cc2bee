import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from db.models import Reservation, Property, ReservationStatus


class ReservationRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, _id: int) -> Optional[Reservation]:
        return self.session.get(Reservation, _id)

    def get_with_property(self, _id: int) -> Optional[Reservation]:
        return self.session.query(Reservation) \
            .options(joinedload(Reservation.property).joinedload(Property.location),
                     joinedload(Reservation.property).joinedload(Property.category),
                     joinedload(Reservation.property).joinedload(Property.seller),
                     joinedload(Reservation.buyer)) \
            .filter(Reservation.id == _id) \
            .first()

    def get_by_buyer_id(self, buyer_id: int) -> List[Reservation]:
        return self.session.query(Reservation) \
            .options(joinedload(Reservation.property).joinedload(Property.location),
                     joinedload(Reservation.property).joinedload(Property.category),
                     joinedload(Reservation.property).joinedload(Property.seller)) \
            .filter(Reservation.buyer_id == buyer_id) \
            .order_by(Reservation.start_date.desc(), Reservation.id.desc()) \
            .all()

    def get_by_seller_id(self, seller_id: int) -> List[Reservation]:
        return self.session.query(Reservation) \
            .join(Reservation.property) \
            .options(joinedload(Reservation.property).joinedload(Property.location),
                     joinedload(Reservation.property).joinedload(Property.category),
                     joinedload(Reservation.buyer)) \
            .filter(Property.seller_id == seller_id) \
            .order_by(Reservation.start_date.desc(), Reservation.id.desc()) \
            .all()

    def get_in_range(self, date_from: datetime.datetime, date_to: datetime.datetime) -> List[Reservation]:
        return self.session.query(Reservation) \
            .options(joinedload(Reservation.buyer),
                     joinedload(Reservation.property).joinedload(Property.location),
                     joinedload(Reservation.property).joinedload(Property.category),
                     joinedload(Reservation.property).joinedload(Property.seller)) \
            .filter(Reservation.start_date >= date_from, Reservation.end_date <= date_to) \
            .order_by(Reservation.start_date.asc(), Reservation.id.asc()) \
            .all()

    def count(self) -> int:
        return self.session.query(func.count(Reservation.id)).scalar() or 0

    def count_by_property(self) -> List[Tuple[int, int]]:
        rows = self.session.query(Reservation.property_id, func.count(Reservation.id)) \
            .group_by(Reservation.property_id) \
            .all()
        return [(property_id, count) for property_id, count in rows]

    def get_start_dates_and_totals(self) -> List[Tuple[datetime.datetime, Decimal]]:
        return [(row.start_date, row.total_price)
                for row in self.session.query(Reservation.start_date, Reservation.total_price).all()]

    def create(self, buyer_id: int, property_id: int, start_date: datetime.datetime, end_date: datetime.datetime,
               total_price: Decimal) -> Reservation:
        """
        (property_id, start_date, end_date)가 이미 존재하면 롤백 후 `IntegrityError`를 그대로 전달합니다.
        """
        reservation = Reservation(
            start_date=start_date,
            end_date=end_date,
            total_price=total_price,
            status=ReservationStatus.PENDING,
            buyer_id=buyer_id,
            property_id=property_id,
        )
        self.session.add(reservation)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise

        return self.get_with_property(reservation.id)

    def update_status(self, reservation: Reservation, status: ReservationStatus) -> Reservation:
        reservation.status = status
        self.session.commit()
        self.session.refresh(reservation)

        return reservation

    def delete(self, reservation: Reservation):
        self.session.delete(reservation)
        self.session.commit()

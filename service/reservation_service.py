import datetime
import logging
from decimal import Decimal
from typing import List

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette import status

from db.models import Reservation, ReservationStatus, Role
from repository.property_repository import PropertyRepository
from repository.reservation_repository import ReservationRepository
from schemas.base import OkOutput
from schemas.reservation import MakeReservationInput
from schemas.user import TokenPayload

logger = logging.getLogger(__name__)

ONE_NIGHT = datetime.timedelta(days=1)
# reservations.total_price 컬럼(Numeric(12, 2))에 저장할 수 있는 최대값
MAX_TOTAL_PRICE = Decimal('9999999999.99')


def count_nights(start_date: datetime.datetime, end_date: datetime.datetime) -> int:
    """
    두 일시 사이의 박 수를 반환합니다. 하루가 안 되는 나머지는 1박으로 올림합니다.
    """
    nights, remainder = divmod(end_date - start_date, ONE_NIGHT)
    return nights + 1 if remainder else nights


def calculate_total_price(price_per_night: Decimal, nights: int) -> Decimal:
    return (Decimal(price_per_night) * nights).quantize(Decimal('0.01'))


class ReservationService:
    def __init__(self, session: Session):
        self.reservation_repository = ReservationRepository(session)
        self.property_repository = PropertyRepository(session)

    def make_reservation(self, buyer_id: int, new_reservation: MakeReservationInput) -> Reservation:
        """
        PENDING 상태의 예약을 만듭니다.
        같은 숙소에 시작/종료 일시가 완전히 같은 예약이 이미 있으면 409를 반환합니다. 기간이 겹치기만 하는 예약은 허용됩니다.
        """
        start_date, end_date = new_reservation.start_date, new_reservation.end_date

        if start_date >= end_date:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Start date must be before end date')

        nights = count_nights(start_date, end_date)
        if nights <= 0:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Invalid reservation period')

        _property = self.property_repository.get_by_id(new_reservation.property_id)
        if not _property:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Property not found')

        total_price = calculate_total_price(_property.price, nights)
        if total_price <= 0:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Total price must be positive')

        if total_price > MAX_TOTAL_PRICE:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Total price is too large')

        try:
            reservation = self.reservation_repository.create(buyer_id, _property.id, start_date, end_date,
                                                             total_price)
        except IntegrityError:
            logger.info('Duplicate reservation range for property %s: %s - %s', _property.id, start_date, end_date)
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail='A reservation for the same period already exists')

        logger.info('Buyer %s reserved property %s for %s nights (%s)', buyer_id, _property.id, nights, total_price)
        return reservation

    def get_my_reservations(self, buyer_id: int) -> List[Reservation]:
        return self.reservation_repository.get_by_buyer_id(buyer_id)

    def get_reservation(self, current_user: TokenPayload, reservation_id: int) -> Reservation:
        """
        BUYER는 자신의 예약만, SELLER는 자신의 숙소에 대한 예약만 조회할 수 있습니다. ADMIN은 모든 예약을 조회할 수 있습니다.
        """
        reservation = self.reservation_repository.get_with_property(reservation_id)

        if not reservation:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Reservation not found')

        if current_user.role == Role.BUYER and reservation.buyer_id != current_user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Forbidden')

        if current_user.role == Role.SELLER and reservation.property.seller_id != current_user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Forbidden')

        return reservation

    def cancel_reservation(self, buyer_id: int, reservation_id: int) -> OkOutput:
        """
        구매자가 자신의 예약을 취소합니다. 확정된 예약은 취소할 수 없고, 이미 취소된 예약은 그대로 성공을 반환합니다.
        """
        reservation = self.reservation_repository.get_by_id(reservation_id)

        if not reservation:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Reservation not found')

        if reservation.buyer_id != buyer_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Forbidden')

        if reservation.status == ReservationStatus.CONFIRMED:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail='A confirmed reservation cannot be cancelled')

        if reservation.status == ReservationStatus.CANCELLED:
            return OkOutput(ok=True)

        self.reservation_repository.update_status(reservation, ReservationStatus.CANCELLED)

        logger.info('Buyer %s cancelled reservation %s', buyer_id, reservation_id)
        return OkOutput(ok=True)

    def get_seller_reservations(self, seller_id: int) -> List[Reservation]:
        return self.reservation_repository.get_by_seller_id(seller_id)

    def update_status_as_seller(self, seller_id: int, reservation_id: int,
                                new_status: ReservationStatus) -> Reservation:
        """
        판매자는 상태 전이 제한 없이 세 가지 상태 중 어느 것으로든 바꿀 수 있습니다.
        """
        reservation = self._get_seller_reservation(seller_id, reservation_id)

        reservation = self.reservation_repository.update_status(reservation, new_status)

        logger.info('Seller %s set reservation %s to %s', seller_id, reservation_id, new_status.value)
        return reservation

    def delete_as_seller(self, seller_id: int, reservation_id: int) -> OkOutput:
        reservation = self._get_seller_reservation(seller_id, reservation_id)

        self.reservation_repository.delete(reservation)

        logger.info('Seller %s deleted reservation %s', seller_id, reservation_id)
        return OkOutput(ok=True)

    def _get_seller_reservation(self, seller_id: int, reservation_id: int) -> Reservation:
        reservation = self.reservation_repository.get_by_id(reservation_id)

        if not reservation:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Reservation not found')

        if reservation.property.seller_id != seller_id:
            logger.warning('Seller %s tried to modify reservation %s', seller_id, reservation_id)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Forbidden')

        return reservation

import datetime
import logging
from collections import defaultdict
from decimal import Decimal
from typing import Optional

from fastapi import HTTPException
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session
from starlette import status

from repository.property_repository import PropertyRepository
from repository.reservation_repository import ReservationRepository
from repository.user_repository import UserRepository
from schemas.admin import AdminMetrics, SellerReservationCount, MonthRevenue, ReservationsReport, SellersOutput, \
    SellerWithProperties
from schemas.reservation import ReportReservation, to_naive_utc

logger = logging.getLogger(__name__)

_datetime_adapter = TypeAdapter(datetime.datetime)


def parse_report_date(value: Optional[str], name: str) -> datetime.datetime:
    if not value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail='Query parameters "from" and "to" are required')

    try:
        return to_naive_utc(_datetime_adapter.validate_python(value.strip()))
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f'Invalid date for "{name}"')


class AdminService:
    def __init__(self, session: Session):
        self.user_repository = UserRepository(session)
        self.property_repository = PropertyRepository(session)
        self.reservation_repository = ReservationRepository(session)

    def get_metrics(self) -> AdminMetrics:
        """
        전체 예약 수, 판매자별 예약 수, 월별 매출을 반환합니다.
        예약이 없는 판매자도 0으로 포함되고, 매출은 부동소수점을 거치지 않고 Decimal 문자열로 반환합니다.
        """
        total_reservations = self.reservation_repository.count()

        property_to_seller = dict(self.property_repository.get_id_seller_pairs())
        seller_counts = defaultdict(int)
        for property_id, count in self.reservation_repository.count_by_property():
            seller_id = property_to_seller.get(property_id)
            if seller_id is None:
                continue
            seller_counts[seller_id] += count

        reservations_per_seller = [
            SellerReservationCount(seller_id=seller.id, seller_name=seller.name, count=seller_counts.get(seller.id, 0))
            for seller in self.user_repository.get_sellers()
        ]

        revenue = defaultdict(Decimal)
        for start_date, total_price in self.reservation_repository.get_start_dates_and_totals():
            revenue[start_date.strftime('%Y-%m')] += Decimal(total_price)

        revenue_by_month = [
            MonthRevenue(month=month, revenue=str(revenue[month].quantize(Decimal('0.01'))))
            for month in sorted(revenue)
        ]

        return AdminMetrics(total_reservations=total_reservations,
                            reservations_per_seller=reservations_per_seller,
                            revenue_by_month=revenue_by_month)

    def get_reservations_report(self, date_from: Optional[str], date_to: Optional[str]) -> ReservationsReport:
        parsed_from = parse_report_date(date_from, 'from')
        parsed_to = parse_report_date(date_to, 'to')

        if parsed_from > parsed_to:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='"from" must not be after "to"')

        items = self.reservation_repository.get_in_range(parsed_from, parsed_to)

        logger.info('Reservation report %s - %s: %s items', parsed_from, parsed_to, len(items))
        return ReservationsReport(from_=parsed_from, to=parsed_to, count=len(items),
                                  items=[ReportReservation.model_validate(item) for item in items])

    def get_sellers(self) -> SellersOutput:
        sellers = self.user_repository.get_sellers_with_properties()
        return SellersOutput(sellers=[SellerWithProperties.model_validate(seller) for seller in sellers])

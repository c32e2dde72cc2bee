import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Numeric, Enum, UniqueConstraint
from sqlalchemy.orm import relationship

from db.database import Base


class Role(str, enum.Enum):
    BUYER = 'BUYER'
    SELLER = 'SELLER'
    ADMIN = 'ADMIN'


class ReservationStatus(str, enum.Enum):
    PENDING = 'PENDING'
    CONFIRMED = 'CONFIRMED'
    CANCELLED = 'CANCELLED'


class User(Base):
    """
    유저를 나타내는 클래스입니다. 구매자/판매자/어드민 여부는 `user_role` 필드로 구분합니다.
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, nullable=False)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    user_role = Column(Enum(Role), nullable=False, default=Role.BUYER)

    properties = relationship('Property', back_populates='seller')
    reservations = relationship('Reservation', back_populates='buyer')


class Category(Base):
    __tablename__ = 'categories'

    id = Column(Integer, primary_key=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default='')

    properties = relationship('Property', back_populates='category')


class Location(Base):
    """
    숙소의 주소입니다. 하나의 숙소에만 속하며 숙소가 삭제되면 함께 삭제됩니다.
    """
    __tablename__ = 'locations'

    id = Column(Integer, primary_key=True, nullable=False)
    address = Column(String(200), nullable=False)
    city = Column(String(80), nullable=False)

    property = relationship('Property', back_populates='location', uselist=False)


class Property(Base):
    __tablename__ = 'properties'

    id = Column(Integer, primary_key=True, nullable=False)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String(500), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    rooms = Column(Integer, nullable=False)

    seller_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    seller = relationship('User', back_populates='properties')
    location_id = Column(Integer, ForeignKey('locations.id'), nullable=False, unique=True)
    location = relationship('Location', back_populates='property')
    category_id = Column(Integer, ForeignKey('categories.id'), nullable=False)
    category = relationship('Category', back_populates='properties')

    reservations = relationship('Reservation', back_populates='property')


class Reservation(Base):
    """
    숙소 예약을 나타내는 클래스입니다.
    같은 숙소에 대해 시작/종료 일시가 완전히 같은 예약은 하나만 존재할 수 있습니다. 기간이 겹치는 것은 막지 않습니다.
    """
    __tablename__ = 'reservations'

    id = Column(Integer, primary_key=True, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)
    status = Column(Enum(ReservationStatus), nullable=False, default=ReservationStatus.PENDING)

    buyer_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    buyer = relationship('User', back_populates='reservations')
    property_id = Column(Integer, ForeignKey('properties.id'), nullable=False)
    property = relationship('Property', back_populates='reservations')

    __table_args__ = (
        UniqueConstraint('property_id', 'start_date', 'end_date', name='uq_reservation_property_range'),
    )

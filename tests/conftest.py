"""
각 endpoint 테스트에서 공통으로 사용하는 fixture 입니다.
"""

import os

os.environ['environment'] = 'test'
os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('JWT_SECRET', 'test-secret')

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import SESSION_COOKIE_NAME
from db.database import Base, get_db
from db.models import User, Category, Location, Property, Reservation, Role, ReservationStatus
from main import app
from util import encode_jwt, hash_password

engine = create_engine(
    'sqlite://',
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = 'Password123!'
PASSWORD_HASH = hash_password(PASSWORD)

BUYER_ID = 1
OTHER_BUYER_ID = 2
SELLER_ID = 3
OTHER_SELLER_ID = 4
ADMIN_ID = 5


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

client = TestClient(app)


@pytest.fixture()
def test_client():
    client.cookies.clear()
    yield client
    client.cookies.clear()


@pytest.fixture()
def session():
    db = TestingSessionLocal()
    yield db
    db.close()


@pytest.fixture()
def test_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def test_db_with_users(test_db):
    db = TestingSessionLocal()
    db.add_all([
        User(id=BUYER_ID, name='Buyer One', email='buyer1@stayhub.com', password=PASSWORD_HASH,
             user_role=Role.BUYER),
        User(id=OTHER_BUYER_ID, name='Buyer Two', email='buyer2@stayhub.com', password=PASSWORD_HASH,
             user_role=Role.BUYER),
        User(id=SELLER_ID, name='Seller One', email='seller1@stayhub.com', password=PASSWORD_HASH,
             user_role=Role.SELLER),
        User(id=OTHER_SELLER_ID, name='Seller Two', email='seller2@stayhub.com', password=PASSWORD_HASH,
             user_role=Role.SELLER),
        User(id=ADMIN_ID, name='Admin', email='admin@stayhub.com', password=PASSWORD_HASH, user_role=Role.ADMIN),
    ])
    db.commit()
    db.close()
    yield


@pytest.fixture()
def test_db_with_properties(test_db_with_users):
    db = TestingSessionLocal()
    apartment = Category(id=1, name='Apartment', description='Self-contained unit')
    house = Category(id=2, name='House', description='Detached house')
    db.add_all([apartment, house])

    rows = [
        (1, 'Central Apartment', '100.00', 2, SELLER_ID, 'Knez Mihailova 1', 'Belgrade', apartment),
        (2, 'Garden House', '140.00', 4, SELLER_ID, 'Trg slobode 1', 'Novi Sad', house),
        (3, 'Budget Studio', '40.00', 1, OTHER_SELLER_ID, 'Nemanjina 4', 'Belgrade', apartment),
        (4, 'Luxury Villa', '250.00', 6, OTHER_SELLER_ID, 'Trg bana Jelacica 1', 'Zagreb', house),
        (5, 'Cozy Loft', '60.00', 2, SELLER_ID, 'Obrenoviceva 1', 'Nis', apartment),
    ]
    for _id, name, price, rooms, seller_id, address, city, category in rows:
        db.add(Property(
            id=_id,
            name=name,
            description=f'{name} description text',
            image=f'https://images.stayhub.com/{_id}.jpg',
            price=Decimal(price),
            rooms=rooms,
            seller_id=seller_id,
            location=Location(id=_id, address=address, city=city),
            category=category,
        ))

    db.commit()
    db.close()
    yield


@pytest.fixture()
def login_as(test_client):
    """
    주어진 유저로 로그인한 것처럼 세션 쿠키를 설정합니다.
    """

    def _login_as(user_id, role):
        test_client.cookies.set(SESSION_COOKIE_NAME, encode_jwt(user_id, role))

    return _login_as


@pytest.fixture()
def insert_reservation():
    def _insert_reservation(buyer_id, property_id, start_date, end_date, total_price,
                            status=ReservationStatus.PENDING):
        db = TestingSessionLocal()
        reservation = Reservation(
            buyer_id=buyer_id,
            property_id=property_id,
            start_date=start_date,
            end_date=end_date,
            total_price=Decimal(total_price),
            status=status,
        )
        db.add(reservation)
        db.commit()
        reservation_id = reservation.id
        db.close()
        return reservation_id

    return _insert_reservation

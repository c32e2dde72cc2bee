"""
초기 데이터를 만드는 데 사용됩니다. `data/` 폴더의 csv 파일에서 유저, 카테고리, 숙소 데이터를 가져옵니다.
"""

import csv
import logging
import os
from decimal import Decimal

from config import ENVIRONMENT
from db.database import SessionLocal
from db.models import User, Category, Location, Property, Role
from util import hash_password

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'data')


def _read_csv(filename):
    with open(os.path.join(DATA_DIR, filename), 'r', encoding='utf-8') as data:
        return [line for line in csv.reader(data) if line]


def init_data():
    # 테스트 실행 시에는 사전 데이터 입력 스킵
    if ENVIRONMENT == 'test':
        return

    session = SessionLocal()
    try:
        if session.query(User).first() is not None:
            logger.info('Seed data already present, skipping')
            return

        logger.info('---inserting seed data started---')

        users = {}
        for name, email, password, role in _read_csv('users.csv'):
            users[email] = User(name=name, email=email, password=hash_password(password), user_role=Role(role))
            session.add(users[email])

        categories = {}
        for name, description in _read_csv('categories.csv'):
            categories[name] = Category(name=name, description=description)
            session.add(categories[name])

        for name, description, image, price, rooms, seller_email, address, city, category in \
                _read_csv('properties.csv'):
            session.add(Property(
                name=name,
                description=description,
                image=image,
                price=Decimal(price),
                rooms=int(rooms),
                seller=users[seller_email],
                location=Location(address=address, city=city),
                category=categories[category],
            ))

        session.commit()
        logger.info('---inserting seed data ended---')
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

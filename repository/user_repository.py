from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from db.models import User, Role, Property
from schemas.user import RegisterUser


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, _id: int) -> Optional[User]:
        return self.session.get(User, _id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.query(User).filter_by(email=email).first()

    def exist_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def get_sellers(self) -> List[User]:
        return self.session.query(User).filter(User.user_role == Role.SELLER).order_by(User.name.asc()).all()

    def get_sellers_with_properties(self) -> List[User]:
        return self.session.query(User) \
            .filter(User.user_role == Role.SELLER) \
            .options(selectinload(User.properties).selectinload(Property.location),
                     selectinload(User.properties).selectinload(Property.category)) \
            .order_by(User.name.asc()) \
            .all()

    def create(self, data: RegisterUser, hashed_password: str, role: Role = Role.BUYER) -> User:
        user = User(name=data.name, email=data.email, password=hashed_password, user_role=role)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        self.session.refresh(user)

        return user

from typing import List, Optional

from sqlalchemy.orm import Session

from db.models import Category


class CategoryRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_all(self) -> List[Category]:
        return self.session.query(Category).order_by(Category.name.asc()).all()

    def get_by_id(self, _id: int) -> Optional[Category]:
        return self.session.get(Category, _id)

    def exist_by_id(self, _id: int) -> bool:
        return self.get_by_id(_id) is not None

from sqlalchemy.orm import Session

from repository.category_repository import CategoryRepository
from schemas.catalog import CategoryListOutput, CategoryBase


class CatalogService:
    def __init__(self, session: Session):
        self.category_repository = CategoryRepository(session)

    def get_categories(self) -> CategoryListOutput:
        categories = self.category_repository.get_all()
        return CategoryListOutput(total=len(categories),
                                  items=[CategoryBase.model_validate(category) for category in categories])

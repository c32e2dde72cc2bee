from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from db.database import get_db
from schemas import catalog
from service.catalog_service import CatalogService

category_router = APIRouter(
    prefix='/categories',
    tags=['카테고리']
)


@category_router.get('', name='카테고리 조회', response_model=catalog.CategoryListOutput)
def get_categories(db: Session = Depends(get_db)):
    """
    모든 숙소 카테고리를 이름 순으로 반환합니다.
    """
    catalog_service = CatalogService(db)
    return catalog_service.get_categories()

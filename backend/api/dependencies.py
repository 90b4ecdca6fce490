from db.database import get_db
from fastapi import Depends
from services.category_gateway import CategoryGateway
from services.category_service import CategoryService
from sqlalchemy.ext.asyncio import AsyncSession


async def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    """Category handlers bound to the request's session."""
    return CategoryService(CategoryGateway(db))

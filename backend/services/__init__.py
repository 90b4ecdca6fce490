# Import specific services where needed:
# from services.category_service import CategoryService
# from services.category_gateway import CategoryGateway

__all__ = []

from catalog.routers.documentaries import router as documentaries_router
from catalog.routers.comments import router as comments_router

__all__ = ["documentaries_router", "comments_router"]

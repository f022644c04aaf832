from app.api.http.health import router as health_router
from app.api.http.documents import router as documents_router
from app.api.http.suggestions import router as suggestions_router

__all__ = [
    "health_router",
    "documents_router",
    "suggestions_router"
]

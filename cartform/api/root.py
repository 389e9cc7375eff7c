from fastapi import APIRouter

from cartform.core.config import settings

router = APIRouter()

@router.get("/")
def root():
    return {
        "name": settings.APP_NAME,
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "product": "/product",
    }

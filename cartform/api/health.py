from fastapi import APIRouter

from cartform.core.fields import build_add_to_cart_fields

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    # field set builds (and is cached) -> forms can render
    build_add_to_cart_fields()
    return {"status": "ok"}

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cartform.api.form_html import router as form_html_router
from cartform.api.health import router as health_router
from cartform.api.product import router as product_router
from cartform.api.root import router as root_router
from cartform.core.config import settings
from cartform.core.logging_config import configure_logging

configure_logging(settings)

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(product_router)
app.include_router(form_html_router)

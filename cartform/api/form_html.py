from fastapi import APIRouter, Depends, Request

from cartform.core.config import settings
from cartform.core.csrf import CsrfTokenManager, get_csrf_manager
from cartform.core.fields import FORM_NAME
from cartform.core.templating import templates

router = APIRouter(tags=["product"])


@router.get("/form-html", name="form_html")
def form_html(
    request: Request,
    csrf: CsrfTokenManager = Depends(get_csrf_manager),
):
    """Hand-written HTML version of the add-to-cart form; it posts to /product."""
    cookie_value, cookie_is_new = csrf.cookie_from(request)
    response = templates.TemplateResponse(
        request,
        "form-html/form.html",
        {
            "app_name": settings.APP_NAME,
            "action": request.url_for("product_show").path,
            "csrf_token": csrf.token_for(FORM_NAME, cookie_value),
        },
    )
    if cookie_is_new:
        response.set_cookie(csrf.cookie_name, cookie_value, httponly=True, samesite="lax")
    return response

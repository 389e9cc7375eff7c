from fastapi.templating import Jinja2Templates

from cartform.core.config import settings

templates = Jinja2Templates(directory=str(settings.templates_dir))

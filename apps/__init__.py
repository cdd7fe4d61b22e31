"""Developer apps feature."""

from .models import DeveloperAppList, DeveloperAppRead
from .service import DeveloperAppService, get_developer_app_service
from .routes import router

__all__ = [
    "DeveloperAppList", "DeveloperAppRead",
    "DeveloperAppService", "get_developer_app_service", "router"
]

"""Developer management feature."""

from .entity import Developer, DeveloperStatus
from .companies import CompanyMembership, Resolved, Unresolved, UNRESOLVED
from .cache import EntityCache, get_developer_cache
from .exceptions import DeveloperAlreadyExistsError, DeveloperDoesNotExistError
from .storage import DeveloperStorage, get_developer_storage
from .routes import router

__all__ = [
    "Developer", "DeveloperStatus",
    "CompanyMembership", "Resolved", "Unresolved", "UNRESOLVED",
    "EntityCache", "get_developer_cache",
    "DeveloperAlreadyExistsError", "DeveloperDoesNotExistError",
    "DeveloperStorage", "get_developer_storage", "router"
]

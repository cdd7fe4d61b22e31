"""Local user accounts."""

from .models import Account, AccountCreate
from .store import AccountStore, get_account_store
from .routes import router

__all__ = ["Account", "AccountCreate", "AccountStore", "get_account_store", "router"]

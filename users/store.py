"""In-memory local account store."""

from itertools import count
from typing import Optional
import structlog

from users.models import Account, AccountCreate

logger = structlog.get_logger()


class AccountStore:
    """Local user accounts, looked up by id or email address."""

    def __init__(self):
        self._accounts: dict[int, Account] = {}
        self._ids = count(1)

    def add(self, account_input: AccountCreate) -> Account:
        """Register a new account."""
        if self.load_by_email(account_input.email) is not None:
            raise ValueError(f"Email already taken: {account_input.email}")
        account = Account(id=next(self._ids), **account_input.model_dump())
        self._accounts[account.id] = account
        logger.info("account_created", uid=account.id, email=account.email)
        return account

    def load(self, uid: int) -> Optional[Account]:
        return self._accounts.get(uid)

    def load_by_email(self, email: str) -> Optional[Account]:
        # Email addresses are matched case-insensitively.
        lower_email = email.lower()
        for account in self._accounts.values():
            if account.email.lower() == lower_email:
                return account
        return None

    def set_developer_id(self, uid: int, developer_id: Optional[str]) -> None:
        """Remember which Edge developer belongs to the account."""
        account = self._accounts.get(uid)
        if account is None:
            raise ValueError(f"User not found: {uid}")
        account.apigee_edge_developer_id = developer_id


# Global singleton instance
_account_store: Optional[AccountStore] = None


def get_account_store() -> AccountStore:
    """Get or create account store singleton."""
    global _account_store
    if _account_store is None:
        _account_store = AccountStore()
    return _account_store

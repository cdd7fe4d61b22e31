"""Developer apps of local users."""

import structlog

from edge.client import EdgeClient
from edge.exceptions import ApiException
from developers.entity import DeveloperStatus
from developers.exceptions import DeveloperDoesNotExistError
from developers.storage import DeveloperStorage, get_developer_storage
from apps.models import DeveloperAppList, DeveloperAppRead
from users.models import Account

logger = structlog.get_logger()

EMPTY_TEXT = "Looks like you do not have any apps. Get started by adding one."
INACTIVE_DEVELOPER_WARNING = (
    "The developer account of {name} is inactive. "
    "Its app credentials cannot be used until the account gets activated."
)


class DeveloperAppService:
    """Lists the apps that belong to the developer of a local account."""

    def __init__(self, storage: DeveloperStorage):
        self.storage = storage
        self.edge: EdgeClient = storage.edge
        self.accounts = storage.accounts

    def _account(self, user_id: int) -> Account:
        account = self.accounts.load(user_id)
        if account is None:
            raise ValueError(f"User not found: {user_id}")
        return account

    def _developer_id(self, account: Account) -> str:
        # An account without a developer id means either Edge could not be
        # reached when it was saved or the two systems are out of sync.
        if account.apigee_edge_developer_id is None:
            raise DeveloperDoesNotExistError(account.email)
        return account.apigee_edge_developer_id

    async def check_developer_status(self, account: Account) -> list[str]:
        """Warnings to display with the listing of an inactive developer."""
        developer = await self.storage.load(self._developer_id(account))
        if developer is not None and developer.status == DeveloperStatus.INACTIVE.value:
            return [INACTIVE_DEVELOPER_WARNING.format(name=account.name)]
        return []

    async def list_for_user(self, user_id: int) -> DeveloperAppList:
        """List the apps of the user's developer, sorted by name."""
        account = self._account(user_id)
        developer_id = self._developer_id(account)
        apps = await self.edge.list_developer_apps(developer_id)
        rows = [DeveloperAppRead.from_edge(app) for app in sorted(apps, key=lambda a: a.name.lower())]
        warnings = await self.check_developer_status(account)
        logger.info("developer_apps_listed", user_id=user_id, count=len(rows))
        return DeveloperAppList(
            user_id=user_id,
            developer_id=developer_id,
            apps=rows,
            warnings=warnings,
            empty_text=None if rows else EMPTY_TEXT,
        )

    async def get_for_user(self, user_id: int, app_name: str) -> DeveloperAppRead:
        """Get one app of the user's developer."""
        developer_id = self._developer_id(self._account(user_id))
        try:
            app = await self.edge.get_developer_app(developer_id, app_name)
        except ApiException as e:
            if e.status_code == 404:
                raise ValueError(f"App not found: {app_name}") from e
            raise
        return DeveloperAppRead.from_edge(app)


# Dependency injection helper
async def get_developer_app_service() -> DeveloperAppService:
    """FastAPI dependency for DeveloperAppService."""
    async for storage in get_developer_storage():
        yield DeveloperAppService(storage)

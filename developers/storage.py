"""Developer storage backed by Apigee Edge."""

from typing import Any, Iterable, Optional
import structlog

from edge.client import EdgeClient, get_edge_client
from edge.exceptions import ApiException
from edge.models import EdgeDeveloper
from developers.cache import EntityCache, get_developer_cache
from developers.entity import Developer
from developers.exceptions import DeveloperAlreadyExistsError
from users.store import AccountStore, get_account_store

logger = structlog.get_logger()


class DeveloperStorage:
    """Loads, saves and deletes developers.

    Loaded developers are kept in a per-instance static cache keyed by their
    local id (original email). Edge representations are shared between
    instances through the process-wide entity cache.
    """

    def __init__(self, edge: EdgeClient, entity_cache: EntityCache, accounts: AccountStore):
        self.edge = edge
        self.entity_cache = entity_cache
        self.accounts = accounts
        self._static_cache: dict[str, Developer] = {}

    def create(self, values: Optional[dict[str, Any]] = None) -> Developer:
        """Create a new, unsaved developer."""
        return self._wrap(decorated=None, values=values)

    def _wrap(self, decorated: Optional[EdgeDeveloper], values: Optional[dict[str, Any]] = None) -> Developer:
        return Developer(
            values,
            decorated,
            edge=self.edge,
            entity_cache=self.entity_cache,
            accounts=self.accounts
        )

    def _from_static_cache(self, id: str) -> Optional[Developer]:
        for key, developer in self._static_cache.items():
            if id == key or id == developer.developer_id:
                return developer
        return None

    async def load(self, id: str) -> Optional[Developer]:
        """Load a developer by email address or developer id."""
        developer = self._from_static_cache(id)
        if developer is not None:
            return developer

        remote = await self.entity_cache.get_entity(id)
        if remote is None:
            try:
                remote = await self.edge.get_developer(id)
            except ApiException as e:
                if e.code == Developer.ERROR_CODE_DEVELOPER_DOES_NOT_EXIST or e.status_code == 404:
                    logger.info("developer_not_found", id=id)
                    return None
                raise
            await self.entity_cache.save_entities([remote])

        developer = self._wrap(remote)
        self._static_cache[developer.id] = developer
        return developer

    async def load_multiple(self, ids: Optional[Iterable[str]] = None) -> list[Developer]:
        """Load the given developers, or every developer when ids is None."""
        if ids is not None:
            developers = []
            for id in ids:
                developer = await self.load(id)
                if developer is not None:
                    developers.append(developer)
            return developers

        remotes = await self.edge.list_developers()
        await self.entity_cache.save_entities(remotes)
        developers = []
        for remote in remotes:
            developer = self._from_static_cache(remote.email) or self._wrap(remote)
            self._static_cache[developer.id] = developer
            developers.append(developer)
        return developers

    async def save(self, developer: Developer) -> Developer:
        """Create or update the developer on Edge."""
        status = developer.status
        if developer.is_new():
            try:
                remote = await self.edge.create_developer(developer.decorated)
            except ApiException as e:
                if e.code == Developer.ERROR_CODE_DEVELOPER_ALREADY_EXISTS:
                    raise DeveloperAlreadyExistsError(developer.email) from e
                raise
            logger.info("developer_created", email=remote.email, developer_id=remote.developer_id)
        else:
            remote = await self.edge.update_developer(developer.original_email, developer.decorated)
            logger.info("developer_updated", email=remote.email, original_email=developer.original_email)

        # From here on the developer reflects what Edge stored, even if the
        # status change below fails.
        await self.reset_cache([key for key in (developer.id, remote.developer_id) if key])
        developer.replace_decorated(remote)
        developer.reset_original_email()

        uid = developer.get_owner_id()
        if uid is not None:
            self.accounts.set_developer_id(uid, developer.developer_id)

        await self.entity_cache.save_entities([remote])
        self._static_cache[developer.id] = developer

        # Edge ignores the status in create and update payloads.
        if remote.status != status:
            await self.edge.set_developer_status(remote.email, status)
            remote.status = status
            await self.entity_cache.save_entities([remote])
        return developer

    async def delete(self, developers: Iterable[Developer]) -> None:
        """Delete developers from Edge and invalidate their cache entries.

        Developers deleted before a failing call are still invalidated.
        """
        deleted: list[Developer] = []
        try:
            for developer in developers:
                await self.edge.delete_developer(developer.id)
                deleted.append(developer)
                logger.info("developer_deleted", email=developer.id, developer_id=developer.developer_id)
        finally:
            if deleted:
                await self.reset_cache([developer.id for developer in deleted])
                await Developer.post_delete(self, deleted)

    async def reset_cache(self, ids: Optional[Iterable[str]] = None) -> None:
        """Reset the static and the shared cache for the given ids (or all)."""
        if ids is None:
            self._static_cache.clear()
            await self.entity_cache.remove_all()
            return

        ids = list(ids)
        for key in [key for key in self._static_cache if key in ids]:
            del self._static_cache[key]
        await self.entity_cache.remove_entities(ids)


# Dependency injection helper
async def get_developer_storage() -> DeveloperStorage:
    """FastAPI dependency for DeveloperStorage."""
    async for edge in get_edge_client():
        yield DeveloperStorage(edge, get_developer_cache(), get_account_store())

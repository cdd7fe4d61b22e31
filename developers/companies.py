"""Lazily resolved company memberships of a developer."""

from dataclasses import dataclass
from typing import Optional, Sequence, Union
import structlog

from edge.client import EdgeClient
from edge.exceptions import ApiException, decode_exception
from developers.cache import EntityCache

logger = structlog.get_logger()


@dataclass(frozen=True)
class Unresolved:
    """The company list has not been looked up yet."""


@dataclass(frozen=True)
class Resolved:
    """The company list is known for the lifetime of the developer instance."""
    companies: tuple[str, ...] = ()


UNRESOLVED = Unresolved()

CompanyState = Union[Unresolved, Resolved]


class CompanyMembership:
    """In-memory company list of one developer instance.

    The list developers endpoint does not return companies, so a developer
    loaded from it starts unresolved and the list is looked up on first
    access: the shared entity cache first, then Edge. A failed Edge call is
    never remembered.
    """

    def __init__(
        self,
        edge: EdgeClient,
        entity_cache: EntityCache,
        companies: Optional[Sequence[str]] = None
    ):
        self._edge = edge
        self._entity_cache = entity_cache
        self.state: CompanyState = UNRESOLVED
        if companies:
            self.adopt(companies)

    def adopt(self, companies: Sequence[str]) -> None:
        self.state = Resolved(tuple(companies))

    async def get(self, developer_id: Optional[str], email: Optional[str]) -> list[str]:
        """Return the company names, resolving them if necessary."""
        if isinstance(self.state, Resolved):
            return list(self.state.companies)

        if developer_id:
            cached = await self._entity_cache.get_entity(developer_id)
            if cached is not None and cached.companies:
                self.adopt(cached.companies)
                return list(self.state.companies)
            if cached is not None:
                # Evict the entry under both of its keys, otherwise the same
                # empty list comes back from the cache on every lookup.
                await self._entity_cache.remove_entities([key for key in (developer_id, email) if key])

        if not email:
            return []

        try:
            developer = await self._edge.get_developer(email)
        except ApiException as exception:
            logger.error(
                "developer_companies_load_failed",
                developer=email,
                **decode_exception(exception)
            )
            return []

        self.adopt(developer.companies)
        await self._entity_cache.save_entities([developer])
        return list(self.state.companies)

"""Developer entity decorating an Edge developer."""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Sequence
import structlog

from edge.client import EdgeClient
from edge.exceptions import decode_exception
from edge.models import Attribute, EdgeDeveloper
from developers.cache import EntityCache
from developers.companies import CompanyMembership, CompanyState
from users.models import Account
from users.store import AccountStore

if TYPE_CHECKING:
    from developers.storage import DeveloperStorage

logger = structlog.get_logger()


class DeveloperStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Developer:
    """A developer as the portal sees it.

    Every accessor forwards to the decorated Edge developer. The local id is
    the email address the developer had when it was loaded (or first set),
    not the Edge developer id, so a developer keeps its identity while its
    email address is being changed.
    """

    ERROR_CODE_DEVELOPER_ALREADY_EXISTS = "developer.service.DeveloperAlreadyExists"
    ERROR_CODE_DEVELOPER_DOES_NOT_EXIST = "developer.service.DeveloperDoesNotExist"

    def __init__(
        self,
        values: Optional[dict[str, Any]] = None,
        decorated: Optional[EdgeDeveloper] = None,
        *,
        edge: EdgeClient,
        entity_cache: EntityCache,
        accounts: AccountStore
    ):
        if decorated is None:
            decorated = EdgeDeveloper.model_validate(values or {})
        # Callers expect the status to be either active or inactive, never None.
        if decorated.status is None:
            decorated.status = DeveloperStatus.ACTIVE.value
        self._decorated = decorated
        self._accounts = accounts
        self._owner_id: Optional[int] = None
        self._original_email: Optional[str] = decorated.email
        self._companies = CompanyMembership(edge, entity_cache, decorated.companies)

    @property
    def decorated(self) -> EdgeDeveloper:
        return self._decorated

    def replace_decorated(self, decorated: EdgeDeveloper) -> None:
        """Swap in a fresh Edge representation, e.g. the response of a save."""
        if decorated.status is None:
            decorated.status = self._decorated.status
        self._decorated = decorated
        if decorated.companies:
            self._companies.adopt(decorated.companies)

    # ==================== Identity ====================

    @property
    def id(self) -> Optional[str]:
        """Local primary key: the original email address."""
        return self._original_email

    @property
    def uuid(self) -> Optional[str]:
        return self._decorated.developer_id

    @property
    def developer_id(self) -> Optional[str]:
        return self._decorated.developer_id

    @classmethod
    def unique_id_properties(cls) -> tuple[str, ...]:
        return ("originalEmail", "developerId")

    def is_new(self) -> bool:
        return self._decorated.developer_id is None

    @property
    def original_email(self) -> Optional[str]:
        return self._original_email

    def reset_original_email(self) -> None:
        self._original_email = self._decorated.email

    @property
    def email(self) -> Optional[str]:
        return self._decorated.email

    @email.setter
    def email(self, email: str) -> None:
        self._decorated.email = email
        if self._original_email is None:
            self._original_email = email

    # ==================== Profile ====================

    @property
    def user_name(self) -> Optional[str]:
        return self._decorated.user_name

    @user_name.setter
    def user_name(self, user_name: str) -> None:
        self._decorated.user_name = user_name

    @property
    def first_name(self) -> Optional[str]:
        return self._decorated.first_name

    @first_name.setter
    def first_name(self, first_name: str) -> None:
        self._decorated.first_name = first_name

    @property
    def last_name(self) -> Optional[str]:
        return self._decorated.last_name

    @last_name.setter
    def last_name(self, last_name: str) -> None:
        self._decorated.last_name = last_name

    @property
    def status(self) -> Optional[str]:
        return self._decorated.status

    @status.setter
    def status(self, status: str) -> None:
        self._decorated.status = DeveloperStatus(status).value

    @property
    def organization_name(self) -> Optional[str]:
        return self._decorated.organization_name

    @property
    def created_at(self) -> Optional[datetime]:
        return self._decorated.created_at

    @property
    def created_by(self) -> Optional[str]:
        return self._decorated.created_by

    @property
    def last_modified_at(self) -> Optional[datetime]:
        return self._decorated.last_modified_at

    @property
    def last_modified_by(self) -> Optional[str]:
        return self._decorated.last_modified_by

    def label(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    # ==================== Attributes ====================

    @property
    def attributes(self) -> list[Attribute]:
        return self._decorated.attributes

    @attributes.setter
    def attributes(self, attributes: Sequence[Attribute]) -> None:
        self._decorated.attributes = list(attributes)

    def get_attribute_value(self, name: str) -> Optional[str]:
        return self._decorated.get_attribute_value(name)

    def set_attribute(self, name: str, value: str) -> None:
        self._decorated.set_attribute(name, value)

    def has_attribute(self, name: str) -> bool:
        return self._decorated.has_attribute(name)

    def delete_attribute(self, name: str) -> None:
        self._decorated.delete_attribute(name)

    # ==================== Relationships ====================

    @property
    def apps(self) -> list[str]:
        return self._decorated.apps

    def has_app(self, app_name: str) -> bool:
        return self._decorated.has_app(app_name)

    @property
    def companies_state(self) -> CompanyState:
        return self._companies.state

    async def get_companies(self) -> list[str]:
        """Names of the companies the developer belongs to.

        Returns an empty list when Edge cannot be reached; the next call
        tries again.
        """
        return await self._companies.get(self.developer_id, self.email)

    def has_company(self, company_name: str) -> bool:
        return self._decorated.has_company(company_name)

    # ==================== Owner ====================

    def get_owner_id(self) -> Optional[int]:
        """Id of the local account with the developer's email address."""
        if self._owner_id is None and self.email:
            account = self._accounts.load_by_email(self.email)
            if account is not None:
                self._owner_id = account.id
            # User names are not unique on Edge so they are not used here.
        return self._owner_id

    def set_owner_id(self, uid: Optional[int]) -> "Developer":
        self._owner_id = uid
        # Accounts being registered have no id yet.
        if uid is not None:
            account = self._accounts.load(uid)
            if account is not None and self.email != account.email:
                self.email = account.email
        return self

    def get_owner(self) -> Optional[Account]:
        uid = self.get_owner_id()
        return None if uid is None else self._accounts.load(uid)

    def set_owner(self, account: Account) -> "Developer":
        return self.set_owner_id(account.id)

    # ==================== Hooks ====================

    @classmethod
    async def post_delete(cls, storage: "DeveloperStorage", developers: Sequence["Developer"]) -> None:
        """Invalidate cache entries keyed by developer id after a delete.

        Deletion may have been requested by email address; entries stored
        under the developer id would otherwise survive it.
        """
        developer_ids = [d.developer_id for d in developers if d.developer_id]
        try:
            await storage.reset_cache(developer_ids)
        except Exception as exception:
            logger.warning(
                "developer_cache_reset_failed",
                developer_ids=developer_ids,
                **decode_exception(exception)
            )

    def __repr__(self) -> str:
        return f"<Developer {self.id!r} ({self.developer_id})>"

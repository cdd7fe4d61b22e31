"""Developer API request and response models."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from developers.entity import Developer, DeveloperStatus


class DeveloperBase(BaseModel):
    """Base developer fields."""
    email: str = Field(..., min_length=3, max_length=254)
    first_name: str = Field(..., min_length=1, max_length=64)
    last_name: str = Field(..., min_length=1, max_length=64)
    user_name: str = Field(..., min_length=1, max_length=64)
    status: DeveloperStatus = DeveloperStatus.ACTIVE
    attributes: dict[str, str] = Field(default_factory=dict)


class DeveloperCreate(DeveloperBase):
    """Create developer request."""
    owner_id: Optional[int] = None


class DeveloperUpdate(BaseModel):
    """Update developer request (all optional)."""
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    user_name: Optional[str] = None
    status: Optional[DeveloperStatus] = None
    attributes: Optional[dict[str, str]] = None


class DeveloperStatusUpdate(BaseModel):
    """Status change request."""
    status: DeveloperStatus


class DeveloperBatchDelete(BaseModel):
    """Delete several developers by email address or developer id."""
    ids: list[str] = Field(..., min_length=1)


class DeveloperRead(BaseModel):
    """Developer as returned by the API."""
    id: Optional[str] = None
    developer_id: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    user_name: Optional[str] = None
    label: str = ""
    status: Optional[str] = None
    organization_name: Optional[str] = None
    apps: list[str] = []
    attributes: dict[str, str] = {}
    owner_id: Optional[int] = None
    created_at: Optional[datetime] = None
    last_modified_at: Optional[datetime] = None

    @classmethod
    def from_developer(cls, developer: Developer) -> "DeveloperRead":
        return cls(
            id=developer.id,
            developer_id=developer.developer_id,
            email=developer.email,
            first_name=developer.first_name,
            last_name=developer.last_name,
            user_name=developer.user_name,
            label=developer.label(),
            status=developer.status,
            organization_name=developer.organization_name,
            apps=developer.apps,
            attributes={a.name: a.value for a in developer.attributes},
            owner_id=developer.get_owner_id(),
            created_at=developer.created_at,
            last_modified_at=developer.last_modified_at,
        )


class CompanyList(BaseModel):
    """Companies a developer belongs to."""
    developer: str
    companies: list[str]

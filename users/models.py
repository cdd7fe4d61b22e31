"""Local account data models."""

from typing import Optional
from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Create account request."""
    email: str = Field(..., min_length=3, max_length=254)
    name: str = Field(..., min_length=1, max_length=60)


class Account(AccountCreate):
    """Local user account."""
    id: int
    apigee_edge_developer_id: Optional[str] = None

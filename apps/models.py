"""Developer app listing models."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from edge.models import EdgeDeveloperApp


class DeveloperAppRead(BaseModel):
    """Developer app row."""
    app_id: Optional[str] = None
    name: str
    display_name: str
    status: Optional[str] = None
    callback_url: Optional[str] = None
    api_products: list[str] = []
    created_at: Optional[datetime] = None
    last_modified_at: Optional[datetime] = None

    @classmethod
    def from_edge(cls, app: EdgeDeveloperApp) -> "DeveloperAppRead":
        products = []
        for credential in app.credentials:
            for product in credential.get("apiProducts", []):
                name = product.get("apiproduct")
                if name and name not in products:
                    products.append(name)
        return cls(
            app_id=app.app_id,
            name=app.name,
            display_name=app.display_name,
            status=app.status,
            callback_url=app.callback_url,
            api_products=products,
            created_at=app.created_at,
            last_modified_at=app.last_modified_at,
        )


class DeveloperAppList(BaseModel):
    """Apps of a local user's developer."""
    user_id: int
    developer_id: str
    apps: list[DeveloperAppRead]
    warnings: list[str] = []
    empty_text: Optional[str] = None

"""Apigee Edge management API client for HTTP operations."""

from typing import Optional, Any
from urllib.parse import quote
import httpx
import structlog

from config import get_settings
from edge.exceptions import ApiException
from edge.models import EdgeApiProduct, EdgeDeveloper, EdgeDeveloperApp

logger = structlog.get_logger()


class EdgeClient:
    """Async client for the Apigee Edge management API."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = get_settings()
        self.organization = settings.apigee_edge_organization
        self.base_url = settings.apigee_edge_base_url
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client with authentication."""
        if self._client is None or self._client.is_closed:
            settings = get_settings()
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                auth=(
                    settings.apigee_edge_username,
                    settings.apigee_edge_password.get_secret_value()
                ),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json"
                },
                timeout=settings.apigee_edge_timeout,
                transport=self._transport
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request scoped to the organization, raising ApiException on failure."""
        client = await self._get_client()
        try:
            response = await client.request(
                method, f"/organizations/{self.organization}{path}", **kwargs
            )
        except httpx.HTTPError as e:
            logger.error("edge_request_failed", method=method, path=path, error=str(e))
            raise ApiException(f"Unable to reach Apigee Edge: {e}") from e

        if response.is_error:
            exception = ApiException.from_response(response)
            logger.warning(
                "edge_request_rejected",
                method=method,
                path=path,
                status_code=response.status_code,
                code=exception.code,
            )
            raise exception
        return response

    @staticmethod
    def _segment(value: str) -> str:
        return quote(value, safe="@")

    # ==================== Developer Operations ====================

    async def list_developers(self) -> list[EdgeDeveloper]:
        """Get all developers of the organization.

        The expanded list endpoint does not return company memberships.
        """
        response = await self._request("GET", "/developers", params={"expand": "true"})
        items = response.json().get("developer", [])
        return [EdgeDeveloper.model_validate(item) for item in items]

    async def get_developer(self, email_or_id: str) -> EdgeDeveloper:
        """Get a developer by email address or developer id."""
        response = await self._request("GET", f"/developers/{self._segment(email_or_id)}")
        return EdgeDeveloper.model_validate(response.json())

    async def create_developer(self, developer: EdgeDeveloper) -> EdgeDeveloper:
        """Create a new developer."""
        response = await self._request("POST", "/developers", json=developer.to_payload())
        logger.info("edge_developer_created", email=developer.email)
        return EdgeDeveloper.model_validate(response.json())

    async def update_developer(self, email: str, developer: EdgeDeveloper) -> EdgeDeveloper:
        """Update the developer currently registered under ``email``."""
        response = await self._request(
            "PUT", f"/developers/{self._segment(email)}", json=developer.to_payload()
        )
        return EdgeDeveloper.model_validate(response.json())

    async def delete_developer(self, email_or_id: str) -> EdgeDeveloper:
        """Delete a developer, returning the deleted representation."""
        response = await self._request("DELETE", f"/developers/{self._segment(email_or_id)}")
        return EdgeDeveloper.model_validate(response.json())

    async def set_developer_status(self, email_or_id: str, status: str) -> None:
        """Activate or deactivate a developer."""
        await self._request(
            "POST",
            f"/developers/{self._segment(email_or_id)}",
            params={"action": status},
            headers={"Content-Type": "application/octet-stream"},
        )
        logger.info("edge_developer_status_changed", developer=email_or_id, status=status)

    # ==================== Developer App Operations ====================

    async def list_developer_apps(self, developer: str) -> list[EdgeDeveloperApp]:
        """Get all apps of a developer (by email or developer id)."""
        response = await self._request(
            "GET", f"/developers/{self._segment(developer)}/apps", params={"expand": "true"}
        )
        items = response.json().get("app", [])
        return [EdgeDeveloperApp.model_validate(item) for item in items]

    async def get_developer_app(self, developer: str, app_name: str) -> EdgeDeveloperApp:
        """Get a single app of a developer."""
        response = await self._request(
            "GET", f"/developers/{self._segment(developer)}/apps/{self._segment(app_name)}"
        )
        return EdgeDeveloperApp.model_validate(response.json())

    # ==================== API Product Operations ====================

    async def list_api_products(self) -> list[EdgeApiProduct]:
        """Get all API products of the organization."""
        response = await self._request("GET", "/apiproducts", params={"expand": "true"})
        items = response.json().get("apiProduct", [])
        return [EdgeApiProduct.model_validate(item) for item in items]

    async def get_api_product(self, name: str) -> EdgeApiProduct:
        """Get a single API product."""
        response = await self._request("GET", f"/apiproducts/{self._segment(name)}")
        return EdgeApiProduct.model_validate(response.json())


# Dependency injection helper
async def get_edge_client() -> EdgeClient:
    """FastAPI dependency for EdgeClient."""
    client = EdgeClient()
    try:
        yield client
    finally:
        await client.close()

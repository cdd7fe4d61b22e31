"""Apigee Edge resource models.

These mirror the JSON representations returned by the management API
(camelCase keys, epoch-millisecond timestamps).
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EdgeModel(BaseModel):
    """Base for Edge representations."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Attribute(EdgeModel):
    """Custom name/value attribute."""
    name: str
    value: str = ""


class AttributesMixin:
    """Helpers over an ``attributes`` list of name/value pairs."""

    def get_attribute_value(self, name: str) -> Optional[str]:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value
        return None

    def has_attribute(self, name: str) -> bool:
        return any(attribute.name == name for attribute in self.attributes)

    def set_attribute(self, name: str, value: str) -> None:
        for attribute in self.attributes:
            if attribute.name == name:
                attribute.value = value
                return
        self.attributes.append(Attribute(name=name, value=value))

    def delete_attribute(self, name: str) -> None:
        self.attributes = [a for a in self.attributes if a.name != name]


class EdgeDeveloper(AttributesMixin, EdgeModel):
    """Developer as returned by /organizations/{org}/developers."""
    developer_id: Optional[str] = None
    email: Optional[str] = None
    user_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: Optional[str] = None
    organization_name: Optional[str] = None
    apps: list[str] = Field(default_factory=list)
    companies: list[str] = Field(default_factory=list)
    attributes: list[Attribute] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    last_modified_at: Optional[datetime] = None
    last_modified_by: Optional[str] = None

    def has_app(self, app_name: str) -> bool:
        return app_name in self.apps

    def has_company(self, company_name: str) -> bool:
        return company_name in self.companies

    def to_payload(self) -> dict[str, Any]:
        """Request body for create and update calls."""
        return self.model_dump(
            by_alias=True,
            exclude_none=True,
            include={"email", "user_name", "first_name", "last_name", "attributes"},
        )


class EdgeDeveloperApp(AttributesMixin, EdgeModel):
    """Developer app as returned by /developers/{developer}/apps."""
    app_id: Optional[str] = None
    name: str
    developer_id: Optional[str] = None
    status: Optional[str] = None
    callback_url: Optional[str] = None
    app_family: Optional[str] = None
    credentials: list[dict[str, Any]] = Field(default_factory=list)
    attributes: list[Attribute] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    last_modified_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.get_attribute_value("DisplayName") or self.name


class EdgeApiProduct(AttributesMixin, EdgeModel):
    """API product as returned by /apiproducts."""
    name: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    approval_type: Optional[str] = None
    api_resources: list[str] = Field(default_factory=list)
    environments: list[str] = Field(default_factory=list)
    proxies: list[str] = Field(default_factory=list)
    scopes: list[str] = Field(default_factory=list)
    attributes: list[Attribute] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    last_modified_at: Optional[datetime] = None

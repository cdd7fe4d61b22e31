"""Apigee Edge management API integration."""

from .client import EdgeClient, get_edge_client
from .exceptions import ApiException, ClientErrorException, ServerErrorException, decode_exception
from .models import Attribute, EdgeApiProduct, EdgeDeveloper, EdgeDeveloperApp

__all__ = [
    "EdgeClient", "get_edge_client",
    "ApiException", "ClientErrorException", "ServerErrorException", "decode_exception",
    "Attribute", "EdgeApiProduct", "EdgeDeveloper", "EdgeDeveloperApp",
]

"""Entra ID adapter querying Microsoft Graph."""

from .directory_query import EntraIdClientSecretQueryProvider
from .graph_client import GraphClient, GraphClientConfig

__all__ = [
    "EntraIdClientSecretQueryProvider",
    "GraphClient",
    "GraphClientConfig",
]

"""
Credentials Package

Provides credential sources and the ordered resolver that combines them.
"""

from .base import CredentialSource, LiteralSource
from .env import EnvironmentSource
from .properties import PropertySource
from .vault import VaultSource, create_vault_client
from .resolver import resolve_credentials, resolve_value, explain_sources

__all__ = [
    "CredentialSource",
    "LiteralSource",
    "EnvironmentSource",
    "PropertySource",
    "VaultSource",
    "create_vault_client",
    "resolve_credentials",
    "resolve_value",
    "explain_sources",
]

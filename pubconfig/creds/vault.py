"""
HashiCorp Vault Credential Source

Reads a single field of a KV v2 secret. Read failures are logged and yield
no value, so the next source in the chain gets its turn.
"""

import os
from typing import Mapping, Optional

import hvac
import hvac.exceptions
import requests

from .base import CredentialSource
from ..errors import CredentialError

# Seconds per Vault request
DEFAULT_TIMEOUT = 5


def create_vault_client(vault_url: Optional[str] = None, token: Optional[str] = None,
                        environ: Optional[Mapping[str, str]] = None,
                        timeout: float = DEFAULT_TIMEOUT) -> hvac.Client:
    """
    Create a token-authenticated Vault client.

    Args:
        vault_url: Vault address, defaults to VAULT_ADDR
        token: Vault token, defaults to VAULT_TOKEN
        environ: Environment mapping to read defaults from
        timeout: Request timeout in seconds

    Raises:
        CredentialError: If the address or token is missing
    """
    environ = os.environ if environ is None else environ
    vault_url = vault_url or environ.get('VAULT_ADDR')
    token = token or environ.get('VAULT_TOKEN')

    if not vault_url:
        raise CredentialError("Vault URL not provided and VAULT_ADDR not set",
                              credential_type="vault")
    if not token:
        raise CredentialError("Vault token not provided and VAULT_TOKEN not set",
                              credential_type="vault")

    return hvac.Client(url=vault_url, token=token, timeout=timeout)


def _mapping(value) -> dict:
    return value if isinstance(value, dict) else {}


class VaultSource(CredentialSource):
    """Credential source backed by one field of a Vault KV v2 secret."""

    kind = "vault"

    def __init__(self, client: hvac.Client, path: str, field: str,
                 mount_point: str = "secret"):
        super().__init__(f"{path}#{field}")
        self.client = client
        self.path = path
        self.field = field
        self.mount_point = mount_point

    def lookup(self) -> Optional[str]:
        try:
            response = self.client.secrets.kv.v2.read_secret_version(
                path=self.path,
                mount_point=self.mount_point,
            )
        except (hvac.exceptions.VaultError, requests.exceptions.RequestException) as e:
            self.logger.warning("Vault lookup failed", source=self.describe(), error=str(e))
            return None

        data = _mapping(_mapping(response).get('data')).get('data')
        value = _mapping(data).get(self.field)
        return None if value is None else str(value)

"""
Project Property Credential Source

Reads credentials from the project property table (``gradle.properties``
plus ``-P`` overrides).
"""

from typing import Mapping, Optional
from .base import CredentialSource


class PropertySource(CredentialSource):
    """Credential source backed by a project property."""

    kind = "property"

    def __init__(self, key: str, properties: Mapping[str, str]):
        super().__init__(key)
        self.key = key
        self.properties = properties

    def lookup(self) -> Optional[str]:
        return self.properties.get(self.key)

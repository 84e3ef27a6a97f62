"""
Environment Credential Source

Reads credentials from environment variables, as CI systems expose them
through credential bindings.
"""

import os
from typing import Mapping, Optional
from .base import CredentialSource


class EnvironmentSource(CredentialSource):
    """Credential source backed by one environment variable."""

    kind = "env"

    def __init__(self, variable: str, environ: Optional[Mapping[str, str]] = None):
        super().__init__(variable)
        self.variable = variable
        self.environ = environ

    def lookup(self) -> Optional[str]:
        # Read at call time so the live environment is used by default
        environ = os.environ if self.environ is None else self.environ
        return environ.get(self.variable)

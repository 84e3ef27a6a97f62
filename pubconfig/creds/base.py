"""
Base Credential Source

Abstract base class for credential sources. A source is a zero-argument
callable returning the value it knows about, or None.
"""

from abc import ABC, abstractmethod
from typing import Optional
import structlog


class CredentialSource(ABC):
    """Abstract base class for credential sources."""

    kind: str = "base"

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(__name__)

    def __call__(self) -> Optional[str]:
        return self.lookup()

    @abstractmethod
    def lookup(self) -> Optional[str]:
        """
        Look up the credential value.

        Returns:
            The value, or None when this source has nothing to offer.
            Implementations must not raise.
        """

    def describe(self) -> str:
        """Describe the source without revealing its value."""
        return f"{self.kind}:{self.name}"

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.describe()}>"


class LiteralSource(CredentialSource):
    """Source that always yields a fixed value."""

    kind = "value"

    def __init__(self, value: Optional[str]):
        super().__init__("literal")
        self.value = value

    def lookup(self) -> Optional[str]:
        return self.value


def describe_source(source) -> str:
    """Describe any lookup callable, including plain functions."""
    describe = getattr(source, "describe", None)
    if callable(describe):
        return describe()
    return getattr(source, "__name__", repr(source))

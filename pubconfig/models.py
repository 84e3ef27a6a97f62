"""
Publishing Models

Immutable value types shared by the resolver, the registrar and the registry.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

ATTACH_ALWAYS = "always"
ATTACH_WHEN_COMPLETE = "when_complete"
ATTACH_POLICIES = (ATTACH_ALWAYS, ATTACH_WHEN_COMPLETE)

MASK = "***MASKED***"

# A credential source: returns the value it knows about, or None.
CredentialLookup = Callable[[], Optional[str]]


@dataclass(frozen=True)
class ResolvedCredentials:
    """Username/password pair resolved for one repository target."""

    username: str
    password: str = field(repr=False)

    @property
    def is_complete(self) -> bool:
        return bool(self.username) and bool(self.password)

    def masked(self) -> Dict[str, str]:
        return {
            'username': self.username,
            'password': MASK if self.password else '',
        }


@dataclass(frozen=True)
class PublicationTarget:
    """
    One remote repository to publish to.

    Attributes:
        name: Repository name as shown to users
        url: Endpoint URL
        username_sources: Ordered lookups for the username
        password_sources: Ordered lookups for the password
        attach_policy: ``always`` or ``when_complete``
        default: Value a field takes when all its sources are exhausted
    """

    name: str
    url: str
    username_sources: Tuple[CredentialLookup, ...] = ()
    password_sources: Tuple[CredentialLookup, ...] = ()
    attach_policy: str = ATTACH_WHEN_COMPLETE
    default: Optional[str] = None


@dataclass(frozen=True)
class Component:
    """Reference to build output produced outside this tool."""

    name: str
    files: Tuple[Path, ...] = ()


@dataclass(frozen=True)
class Publication:
    identifier: str
    component: Component

    def summary(self) -> Dict[str, Any]:
        return {
            'identifier': self.identifier,
            'component': self.component.name,
            'files': [str(path) for path in self.component.files],
        }


@dataclass(frozen=True)
class RepositoryEntry:
    """A repository as stored by the publishing registry."""

    name: str
    url: str
    credentials: Optional[ResolvedCredentials] = None

    @property
    def authenticated(self) -> bool:
        return self.credentials is not None and self.credentials.is_complete

    def summary(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'url': self.url,
            'authenticated': self.authenticated,
            'credentials': self.credentials.masked() if self.credentials else None,
        }

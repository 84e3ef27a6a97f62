"""
Publishing Registry

In-memory model of the publishing subsystem: repositories to publish to and
the publications to send there.
"""

import structlog
from typing import Dict, Any, List

from .errors import RegistrationError
from .loggingx import log_registration
from .models import Publication, RepositoryEntry


class PublishingRegistry:
    """Registry for repository entries and publications."""

    def __init__(self):
        self.logger = structlog.get_logger(__name__)
        self._repositories: Dict[str, RepositoryEntry] = {}
        self._publications: Dict[str, Publication] = {}

    def add_repository(self, entry: RepositoryEntry) -> None:
        """Register a repository. A repeated name replaces the earlier entry."""
        if entry.name in self._repositories:
            self.logger.warning("Replacing repository", name=entry.name)

        self._repositories[entry.name] = entry
        log_registration("repository", entry.name, logger=self.logger,
                         url=entry.url, authenticated=entry.authenticated)

    def add_publication(self, publication: Publication) -> None:
        """Register a publication. Identifiers must be unique."""
        if publication.identifier in self._publications:
            raise RegistrationError(
                f"Publication '{publication.identifier}' is already registered",
                entry_type="publication",
                entry_name=publication.identifier,
            )

        self._publications[publication.identifier] = publication
        log_registration("publication", publication.identifier, logger=self.logger,
                         component=publication.component.name)

    def get_repository(self, name: str) -> RepositoryEntry:
        """Get a repository by name."""
        if name not in self._repositories:
            raise KeyError(f"Unknown repository: {name}")

        return self._repositories[name]

    def get_publication(self, identifier: str) -> Publication:
        """Get a publication by identifier."""
        if identifier not in self._publications:
            raise KeyError(f"Unknown publication: {identifier}")

        return self._publications[identifier]

    def list_repositories(self) -> List[RepositoryEntry]:
        return list(self._repositories.values())

    def list_publications(self) -> List[Publication]:
        return list(self._publications.values())

    def has_publication(self, identifier: str) -> bool:
        return identifier in self._publications

    def summary(self) -> Dict[str, Any]:
        """Serializable view of the registry with credentials masked."""
        return {
            'publications': [p.summary() for p in self._publications.values()],
            'repositories': [r.summary() for r in self._repositories.values()],
        }

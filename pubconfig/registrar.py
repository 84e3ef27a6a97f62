"""
Repository Registrar

Resolves credentials for each publication target and registers targets and
the publication with the publishing registry.
"""

import os
from typing import Any, Dict, Mapping, Optional

import structlog

from .config import build_targets, load_config
from .creds import resolve_credentials
from .errors import ConfigurationError
from .models import ATTACH_ALWAYS, Component, Publication, PublicationTarget, RepositoryEntry
from .registry import PublishingRegistry

logger = structlog.get_logger(__name__)


def register_repository(registry: PublishingRegistry,
                        target: PublicationTarget) -> RepositoryEntry:
    """
    Register one repository target.

    ``always`` targets carry a credentials block even when it is empty;
    ``when_complete`` targets carry one only when both fields are non-empty.
    Reachability of the endpoint is not checked here.
    """
    credentials = resolve_credentials(target.username_sources, target.password_sources,
                                      default=target.default, target=target.name)

    if target.attach_policy != ATTACH_ALWAYS and not (credentials and credentials.is_complete):
        credentials = None

    entry = RepositoryEntry(name=target.name, url=target.url, credentials=credentials)
    registry.add_repository(entry)
    return entry


def register_publication(registry: PublishingRegistry, identifier: str,
                         component: Component) -> Publication:
    """Register one named publication wrapping a prebuilt component."""
    publication = Publication(identifier=identifier, component=component)
    registry.add_publication(publication)
    return publication


def configure_publishing(registry: PublishingRegistry,
                         properties: Mapping[str, str],
                         components: Mapping[str, Component],
                         environ: Optional[Mapping[str, str]] = None,
                         config: Optional[Dict[str, Any]] = None,
                         vault_client=None) -> PublishingRegistry:
    """
    Register the publication and every declared repository, in declaration order.

    Args:
        registry: Registry to write to
        properties: Project properties
        components: Build components by name
        environ: Environment mapping, defaults to os.environ
        config: Publishing declaration, defaults to the built-in one
        vault_client: Optional pre-built hvac client for Vault sources

    Raises:
        ConfigurationError: If the declaration is malformed or the component is missing
    """
    config = load_config() if config is None else config
    environ = os.environ if environ is None else environ

    publication = config.get('publication') or {}
    if not isinstance(publication, dict):
        raise ConfigurationError("'publication' must be a mapping with 'name' and 'component'",
                                 config_path='publication')
    identifier = str(publication.get('name', 'mavenJava'))
    component_name = str(publication.get('component', 'java'))
    if component_name not in components:
        raise ConfigurationError(f"Component '{component_name}' not found",
                                 config_path='publication.component',
                                 available=sorted(components))

    targets = build_targets(config, properties, environ, vault_client=vault_client)

    logger.info("Configuring publishing",
                publication=identifier, repositories=[t.name for t in targets])

    register_publication(registry, identifier, components[component_name])
    for target in targets:
        register_repository(registry, target)

    return registry

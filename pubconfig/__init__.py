"""
Publishing Configurator Package

Resolves repository credentials from ordered sources and registers
repositories and the publication with the publishing registry.
"""

__version__ = "1.0.0"

from .registry import PublishingRegistry
from .registrar import configure_publishing, register_publication, register_repository
from .creds import resolve_credentials
from .cli import cli

__all__ = [
    "PublishingRegistry",
    "configure_publishing",
    "register_publication",
    "register_repository",
    "resolve_credentials",
    "cli",
]

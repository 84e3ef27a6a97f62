"""
Credential Resolver

Walks ordered credential sources and picks the first usable value.
Resolution is total: it never raises and never prompts.
"""

from typing import Optional, Sequence, Tuple

from .base import describe_source
from ..models import CredentialLookup, ResolvedCredentials
from ..loggingx import log_credential_resolution

DEFAULT_SOURCE = "default"


def resolve_value(sources: Sequence[CredentialLookup],
                  default: Optional[str] = None) -> Tuple[Optional[str], Optional[str]]:
    """
    Return the first non-empty value from ``sources``.

    Args:
        sources: Lookups in precedence order
        default: Value used when every source is exhausted

    Returns:
        Tuple of (value, description of the source that supplied it). The
        description is ``"default"`` when the default was used and None when
        nothing matched and there is no default.
    """
    for source in sources:
        value = source()
        if value:
            return value, describe_source(source)

    if default is None:
        return None, None
    return default, DEFAULT_SOURCE


def resolve_credentials(username_sources: Sequence[CredentialLookup],
                        password_sources: Sequence[CredentialLookup],
                        default: Optional[str] = None,
                        target: str = "") -> Optional[ResolvedCredentials]:
    """
    Resolve a username/password pair, each field independently.

    Returns:
        ResolvedCredentials, or None when either field has no value and no
        default applies.
    """
    username, username_source = resolve_value(username_sources, default)
    password, password_source = resolve_value(password_sources, default)

    log_credential_resolution(target, "username", username_source)
    log_credential_resolution(target, "password", password_source)

    if username is None or password is None:
        return None
    return ResolvedCredentials(username=username, password=password)


def explain_sources(username_sources: Sequence[CredentialLookup],
                    password_sources: Sequence[CredentialLookup],
                    default: Optional[str] = None) -> dict:
    """Report which source would supply each field, without values."""
    return {
        'username': resolve_value(username_sources, default)[1],
        'password': resolve_value(password_sources, default)[1],
    }

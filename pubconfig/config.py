"""
Publishing Configuration

Loads the publishing declaration (YAML) and project properties, and turns
repository declarations into PublicationTarget objects.
"""

import copy
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import yaml

from .creds import EnvironmentSource, LiteralSource, PropertySource, VaultSource, create_vault_client
from .errors import ConfigurationError
from .models import ATTACH_ALWAYS, ATTACH_POLICIES, ATTACH_WHEN_COMPLETE, PublicationTarget

DEFAULT_CONFIG: Dict[str, Any] = {
    'publication': {
        'name': 'mavenJava',
        'component': 'java',
    },
    'repositories': [
        {
            'name': 'maven',
            'url': 'https://maven.solo-studios.ca/releases/',
            'attach_credentials': ATTACH_WHEN_COMPLETE,
            'username': [{'property': 'SoloStudiosReleasesUsername'}],
            'password': [{'property': 'SoloStudiosReleasesPassword'}],
        },
        {
            'name': 'Repsy',
            'url': 'https://repo.repsy.io/mvn/diytechy/terra',
            'attach_credentials': ATTACH_ALWAYS,
            'default': '',
            'username': [{'property': 'repsy.user'}, {'env': 'REPSY_USERNAME'}],
            'password': [{'property': 'repsy.key'}, {'env': 'REPSY_PASSWORD'}],
        },
    ],
}

_ENV_PLACEHOLDER = re.compile(r'\$\{([^}]+)\}')


def substitute_env_vars(value: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Substitute ${VAR_NAME} placeholders from the environment.

    Unknown variables are left as-is.
    """
    if not isinstance(value, str):
        return value

    environ = os.environ if environ is None else environ

    def replace_var(match):
        return environ.get(match.group(1), match.group(0))

    return _ENV_PLACEHOLDER.sub(replace_var, value)


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the publishing declaration.

    Args:
        config_file: Optional YAML file; the built-in declaration is used without one

    Raises:
        ConfigurationError: If the file cannot be read or has the wrong shape
    """
    if config_file is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load configuration: {e}", config_file=config_file)

    if not isinstance(config, dict):
        raise ConfigurationError("Configuration must be a mapping", config_file=config_file)

    config.setdefault('publication', copy.deepcopy(DEFAULT_CONFIG['publication']))
    repositories = config.setdefault('repositories', [])
    if not isinstance(repositories, list):
        raise ConfigurationError("'repositories' must be a list",
                                 config_file=config_file, config_path='repositories')
    return config


_PROPERTY_ESCAPES = {'t': '\t', 'n': '\n', 'r': '\r', 'f': '\f'}
_PROPERTY_WHITESPACE = ' \t\f'


def _logical_lines(text: str) -> Iterator[str]:
    """Join backslash-continued lines, dropping blank and comment lines."""
    pending = None
    for natural in text.splitlines():
        line = natural.lstrip(_PROPERTY_WHITESPACE)
        if pending is None and (not line or line[0] in '#!'):
            continue

        # An odd run of trailing backslashes continues the line
        if (len(line) - len(line.rstrip('\\'))) % 2:
            pending = (pending or '') + line[:-1]
            continue

        yield (pending or '') + line
        pending = None

    if pending is not None:
        yield pending


def _unescape(text: str) -> str:
    if '\\' not in text:
        return text

    chars = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != '\\':
            chars.append(char)
            index += 1
            continue

        escaped = text[index + 1:index + 2]
        if escaped == 'u':
            digits = text[index + 2:index + 6]
            if not re.fullmatch(r'[0-9a-fA-F]{4}', digits):
                raise ConfigurationError("Malformed \\uxxxx escape in properties")
            chars.append(chr(int(digits, 16)))
            index += 6
        else:
            chars.append(_PROPERTY_ESCAPES.get(escaped, escaped))
            index += 2
    return ''.join(chars)


def _split_property(line: str) -> Tuple[str, str]:
    index = 0
    while index < len(line):
        char = line[index]
        if char == '\\':
            index += 2
            continue
        if char in '=:' or char in _PROPERTY_WHITESPACE:
            break
        index += 1

    key, rest = line[:index], line[index:].lstrip(_PROPERTY_WHITESPACE)
    if rest[:1] in ('=', ':'):
        rest = rest[1:].lstrip(_PROPERTY_WHITESPACE)
    return _unescape(key), _unescape(rest)


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse Java ``.properties`` text.

    Supports ``=``, ``:`` and whitespace separators, ``#``/``!`` comments,
    backslash line continuations, escaped separators in keys and
    ``\\t``/``\\n``/``\\uXXXX`` escapes. Later keys win.

    Raises:
        ConfigurationError: On a malformed ``\\uXXXX`` escape
    """
    return dict(_split_property(line) for line in _logical_lines(text))


def load_properties(properties_file: Optional[str] = None) -> Dict[str, str]:
    """
    Load project properties from a ``gradle.properties`` style file.

    A missing default file is not an error; an explicitly named one is.
    """
    path = Path(properties_file or 'gradle.properties')
    if not path.exists():
        if properties_file:
            raise ConfigurationError("Properties file not found", config_file=str(path))
        return {}

    try:
        return parse_properties(path.read_text(encoding='utf-8'))
    except OSError as e:
        raise ConfigurationError(f"Failed to read properties: {e}", config_file=str(path))


def parse_property_overrides(overrides: Iterable[str]) -> Dict[str, str]:
    """Parse ``-P key=value`` command-line overrides."""
    properties = {}
    for override in overrides:
        key, sep, value = override.partition('=')
        if not sep or not key:
            raise ConfigurationError(f"Invalid property override '{override}', expected key=value")
        properties[key] = value
    return properties


def _as_text(value: Any) -> Optional[str]:
    """YAML scalars such as ``1234`` become strings; null stays None."""
    return None if value is None else str(value)


def _repository_name(declaration: Mapping[str, Any], taken: set) -> str:
    """Explicit name, or ``maven``, ``maven2``, ... for unnamed repositories."""
    if declaration.get('name'):
        return str(declaration['name'])

    name, counter = 'maven', 1
    while name in taken:
        counter += 1
        name = f"maven{counter}"
    return name


class SourceFactory:
    """Builds credential sources from declarations, creating a Vault client on demand."""

    def __init__(self, properties: Mapping[str, str], environ: Mapping[str, str],
                 vault_client=None):
        self.properties = properties
        self.environ = environ
        self._vault_client = vault_client

    @property
    def vault_client(self):
        if self._vault_client is None:
            self._vault_client = create_vault_client(environ=self.environ)
        return self._vault_client

    def build(self, declaration: Any, config_path: str):
        if not isinstance(declaration, dict):
            raise ConfigurationError("Credential source must be a mapping",
                                     config_path=config_path)

        if 'property' in declaration:
            return PropertySource(str(declaration['property']), self.properties)
        if 'env' in declaration:
            return EnvironmentSource(str(declaration['env']), self.environ)
        if 'value' in declaration:
            return LiteralSource(_as_text(declaration['value']))
        if 'vault' in declaration:
            if 'field' not in declaration:
                raise ConfigurationError("Vault source needs a 'field'", config_path=config_path)
            return VaultSource(self.vault_client, str(declaration['vault']),
                               str(declaration['field']),
                               mount_point=declaration.get('mount_point', 'secret'))

        raise ConfigurationError(f"Unknown credential source: {sorted(declaration)}",
                                 config_path=config_path)


def build_targets(config: Mapping[str, Any], properties: Mapping[str, str],
                  environ: Optional[Mapping[str, str]] = None,
                  vault_client=None) -> List[PublicationTarget]:
    """
    Turn repository declarations into PublicationTarget objects.

    Raises:
        ConfigurationError: If a declaration is incomplete or malformed
    """
    environ = os.environ if environ is None else environ
    factory = SourceFactory(properties, environ, vault_client)
    targets = []
    taken = {str(d['name']) for d in config.get('repositories', [])
             if isinstance(d, dict) and d.get('name')}

    for index, declaration in enumerate(config.get('repositories', [])):
        path = f"repositories[{index}]"
        if not isinstance(declaration, dict) or not declaration.get('url'):
            raise ConfigurationError("Repository needs a 'url'", config_path=path)

        policy = declaration.get('attach_credentials', ATTACH_WHEN_COMPLETE)
        if policy not in ATTACH_POLICIES:
            raise ConfigurationError(f"Unknown attach_credentials policy '{policy}'",
                                     config_path=f"{path}.attach_credentials")

        url = substitute_env_vars(str(declaration['url']), environ)
        name = _repository_name(declaration, taken)
        taken.add(name)
        targets.append(PublicationTarget(
            name=name,
            url=url,
            username_sources=tuple(
                factory.build(d, f"{path}.username[{i}]")
                for i, d in enumerate(declaration.get('username') or [])
            ),
            password_sources=tuple(
                factory.build(d, f"{path}.password[{i}]")
                for i, d in enumerate(declaration.get('password') or [])
            ),
            attach_policy=policy,
            default=_as_text(declaration.get('default')),
        ))

    return targets

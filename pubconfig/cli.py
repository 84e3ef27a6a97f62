"""
Command-line interface for the publishing configurator.
"""

import json
import os

import click

from .components import discover_components
from .config import build_targets, load_config, load_properties, parse_property_overrides
from .creds import explain_sources
from .errors import PublishingError, format_error_context
from .loggingx import get_logger, setup_logging
from .registrar import configure_publishing
from .registry import PublishingRegistry

logger = get_logger(__name__)


def _collect_properties(properties_file, overrides):
    properties = load_properties(properties_file)
    properties.update(parse_property_overrides(overrides))
    return properties


@click.group()
@click.version_option(version="1.0.0")
@click.option('-v', '--verbose', is_flag=True, help='Human-readable debug logging')
@click.option('--log-file', default=None, help='Also write logs to this file')
def cli(verbose: bool, log_file):
    """Publishing configurator - resolve credentials and register repositories."""
    setup_logging(level="DEBUG" if verbose else "WARNING", verbose=verbose, log_file=log_file)


def common_options(func):
    func = click.option('-P', 'overrides', multiple=True, metavar='KEY=VALUE',
                        help='Project property override')(func)
    func = click.option('--properties', 'properties_file', type=click.Path(exists=True),
                        default=None, help='Project properties file (default: gradle.properties)')(func)
    func = click.option('-c', '--config', 'config_file', type=click.Path(exists=True),
                        default=None, help='Publishing declaration (YAML)')(func)
    return func


@cli.command()
@common_options
@click.option('--build-dir', default='build', help='Build output directory')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']),
              default='text', help='Output format')
def configure(config_file, properties_file, overrides, build_dir: str, output_format: str):
    """Register the publication and repositories, then show the result."""
    try:
        config = load_config(config_file)
        properties = _collect_properties(properties_file, overrides)
        registry = configure_publishing(
            PublishingRegistry(),
            properties,
            discover_components(build_dir),
            environ=os.environ,
            config=config,
        )
    except PublishingError as e:
        logger.error("Configuration failed", **format_error_context(e))
        click.echo(f"❌ Publishing configuration failed: {e}", err=True)
        raise click.Abort()

    summary = registry.summary()
    if output_format == 'json':
        click.echo(json.dumps(summary, indent=2))
        return

    for publication in summary['publications']:
        click.echo(f"Publication: {publication['identifier']} "
                   f"(component {publication['component']}, {len(publication['files'])} files)")
    click.echo("Repositories:")
    for repository in summary['repositories']:
        state = "authenticated" if repository['authenticated'] else "unauthenticated"
        click.echo(f"  {repository['name']}: {repository['url']} [{state}]")


@cli.command()
@common_options
def sources(config_file, properties_file, overrides):
    """Show which source supplies each credential, without values."""
    try:
        config = load_config(config_file)
        properties = _collect_properties(properties_file, overrides)
        targets = build_targets(config, properties, os.environ)
    except PublishingError as e:
        click.echo(f"❌ Failed to read configuration: {e}", err=True)
        raise click.Abort()

    for target in targets:
        winners = explain_sources(target.username_sources, target.password_sources,
                                  default=target.default)
        click.echo(f"{target.name} ({target.url}):")
        for field in ('username', 'password'):
            click.echo(f"  {field}: {winners[field] or 'unresolved'}")


if __name__ == '__main__':
    cli()

#!/usr/bin/env python3
"""
Command-line interface for inspecting web search configuration.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from .config import ConfigurationLoader
from .exceptions import ConfigurationError, MissingApiKeyError
from .freshness import parse_freshness
from .perplexity import classify_api_key
from .settings import require_api_key, resolve_search_settings

load_dotenv()


def setup_logging(log_level: str, verbose: bool = False) -> None:
    """Set up logging configuration for the CLI."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {log_level}')

    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s' if verbose else '%(levelname)s: %(message)s'

    logging.basicConfig(level=numeric_level, format=log_format, datefmt='%Y-%m-%d %H:%M:%S')


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
              help='Path to configuration file (YAML format)')
@click.option('--log-level', '-l', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
              default='WARNING', help='Set the logging level')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output with detailed logging')
@click.pass_context
def cli(ctx, config: Optional[str], log_level: str, verbose: bool):
    """Web Search Config - resolve provider endpoints, keys and filters."""
    ctx.ensure_object(dict)
    setup_logging(log_level, verbose)

    ctx.obj.update({
        'config_path': Path(config) if config else None,
        'verbose': verbose,
        'search_config': None
    })

    if config:
        try:
            ctx.obj['search_config'] = ConfigurationLoader().load_from_file(config)
        except ConfigurationError as e:
            click.echo(f"Error loading configuration: {e}", err=True)
            sys.exit(1)


@cli.command()
@click.option('--json', 'as_json', is_flag=True, help='Print settings as JSON')
@click.option('--require-key', is_flag=True, help='Exit with an error when no API key is available')
@click.pass_context
def resolve(ctx, as_json: bool, require_key: bool):
    """Show the settings web search would use right now."""
    settings = resolve_search_settings(ctx.obj.get('search_config'))

    if require_key:
        try:
            require_api_key(settings)
        except MissingApiKeyError as e:
            if as_json:
                click.echo(json.dumps(e.to_dict(), indent=2), err=True)
            else:
                click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    if as_json:
        click.echo(json.dumps(settings.to_dict(), indent=2))
        return

    data = settings.to_dict()
    click.echo("Web Search Settings")
    click.echo("=" * 40)
    for key in ("enabled", "provider", "api_key", "key_source", "base_url", "model", "engine",
                "count", "timeout_seconds", "cache_ttl_ms"):
        if data[key] is None and key in ("key_source", "base_url", "model", "engine"):
            continue
        value = data[key] if data[key] is not None else "(not set)"
        click.echo(f"{key.replace('_', ' ').title()}: {value}")


@cli.command()
@click.argument('value')
def freshness(value: str):
    """Validate and normalize a freshness filter value."""
    parsed = parse_freshness(value)
    if not parsed.is_valid:
        click.echo(
            f"✗ Invalid freshness '{value}': use pd, pw, pm, py or a range like YYYY-MM-DDtoYYYY-MM-DD",
            err=True
        )
        sys.exit(1)
    click.echo(parsed.value)


@cli.command()
@click.argument('api_key')
def classify(api_key: str):
    """Guess which provider issued an API key."""
    shape = classify_api_key(api_key)
    click.echo(shape.value if shape else "unknown")


@cli.command()
@click.argument('config_file', type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True))
def validate(config_file: str):
    """Validate a configuration file."""
    validation_result = ConfigurationLoader().validate_config_file(config_file)

    if validation_result['is_valid']:
        click.echo(f"✓ Configuration file '{config_file}' is valid")
        for warning in validation_result['warnings']:
            click.echo(f"  Warning: {warning}")
    else:
        click.echo(f"✗ Configuration file '{config_file}' is invalid", err=True)
        click.echo("\nErrors found:", err=True)
        for error in validation_result['errors']:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)


def main():
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.", err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()

"""
Command-line tool for checking translation tables outside a host.

    localetable check translation.csv --locale fr-FR --keys keys.yaml
    localetable show translation.csv --locale de-DE --format json
"""

import json
import sys
from pathlib import Path

import click
import yaml

from . import __version__
from .config.loader import load_config
from .config.schema import AppConfig
from .diagnostics import LoadResult
from .errors import ResourceAccessError
from .header import COMMENT_MARKER
from .loader import LINE_BREAK, TranslationLoader, read_resource
from .logging import configure_logging
from .registry import KeyRegistry
from .resolver import REFERENCE_MARKER
from .resources import FileResource, ResourceProvider
from .tokenizer import FieldReader

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_WARNINGS = 2
EXIT_CONFIG_ERROR = 3


def _common_options(func):
    func = click.option(
        "-v", "--verbose", count=True, help="Increase log detail (-v info, -vv debug)"
    )(func)
    func = click.option(
        "-k",
        "--keys",
        type=click.Path(exists=True, path_type=Path),
        help="YAML key registry (defaults to the keys found in the table)",
    )(func)
    func = click.option(
        "-l", "--locale", default=None, help="Locale to build (defaults to the default locale)"
    )(func)
    func = click.option(
        "-d", "--default-locale", default=None, help="Default locale expected first in the header"
    )(func)
    func = click.option(
        "-c",
        "--config",
        type=click.Path(exists=True, path_type=Path),
        help="Path to the YAML configuration file",
    )(func)
    return func


def registry_from_table(resource: ResourceProvider) -> KeyRegistry:
    """Registry made of every regular key the table itself defines."""
    keys: dict[str, str] = {}
    for line in LINE_BREAK.split(read_resource(resource))[1:]:
        if not line.strip():
            continue
        key = FieldReader(line).next_field()
        if key and not key.startswith((COMMENT_MARKER, REFERENCE_MARKER)):
            keys.setdefault(key, key)
    return KeyRegistry(keys)


def _setup(table: Path, config: Path | None, cli_args: dict) -> AppConfig:
    try:
        app_config = load_config(config_path=config, cli_args={**cli_args, "table": table})
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except Exception as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    configure_logging(app_config.logging)
    return app_config


def _load(app_config: AppConfig, locale: str | None) -> LoadResult:
    resource = FileResource(app_config.loader.table)
    try:
        if app_config.loader.keys:
            registry = KeyRegistry.from_yaml(app_config.loader.keys)
        else:
            registry = registry_from_table(resource)
        loader = TranslationLoader.from_config(app_config.loader, resource=resource, registry=registry)
        return loader.load(locale or app_config.loader.default_locale)
    except (ResourceAccessError, OSError, ValueError, yaml.YAMLError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)


@click.group()
@click.version_option(version=__version__, prog_name="localetable")
def main() -> None:
    """localetable - check and inspect CSV translation tables."""
    pass


@main.command()
@click.argument("table", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_common_options
def check(
    table: Path,
    config: Path | None,
    default_locale: str | None,
    locale: str | None,
    keys: Path | None,
    verbose: int,
) -> None:
    """Load TABLE for one locale and report every diagnostic."""
    app_config = _setup(
        table, config, {"default_locale": default_locale, "keys": keys, "verbose": verbose}
    )
    result = _load(app_config, locale)

    for diagnostic in result.diagnostics:
        click.echo(f"{diagnostic.severity.value.upper():<8} {diagnostic}")
    click.echo(result.summary())

    if not result.success:
        sys.exit(EXIT_FAILED)
    if result.warnings:
        sys.exit(EXIT_WARNINGS)


@main.command()
@click.argument("table", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_common_options
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Output format",
)
def show(
    table: Path,
    config: Path | None,
    default_locale: str | None,
    locale: str | None,
    keys: Path | None,
    verbose: int,
    output_format: str,
) -> None:
    """Print the resolved TABLE for one locale."""
    app_config = _setup(
        table, config, {"default_locale": default_locale, "keys": keys, "verbose": verbose}
    )
    result = _load(app_config, locale)

    if not result.success or result.table is None:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(EXIT_FAILED)

    entries = dict(result.table.entries)
    if output_format == "json":
        click.echo(json.dumps(entries, indent=2, ensure_ascii=False))
    else:
        click.echo(yaml.safe_dump(entries, allow_unicode=True, sort_keys=False), nl=False)


if __name__ == "__main__":
    main()

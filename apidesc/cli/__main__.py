"""apidesc CLI - Main Entry Point.

Commands:
    inspect  - Describe one handler and print its operation
    version  - Show version information
"""

import importlib
import json
import logging
import os
import sys
from typing import Any, Optional

import click

from .. import __version__
from ..config import ConfigLoader
from ..endpoint.metadata import EndpointMetadata, HttpMethodMetadata
from ..faults import Fault
from ..openapi import OperationGenerator


def _error(message: str) -> None:
    click.echo(click.style(message, fg="red"), err=True)


def _resolve_target(target: str) -> Any:
    """Import ``module:attribute`` or ``module:Class.method``."""
    module_name, _, attr_path = target.partition(":")
    if not module_name or not attr_path:
        raise click.BadParameter("expected 'module:attribute'", param_hint="TARGET")

    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())

    try:
        obj: Any = importlib.import_module(module_name)
        for part in attr_path.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as exc:
        raise click.BadParameter(f"cannot load '{target}': {exc}", param_hint="TARGET")
    return obj


@click.group()
@click.version_option(version=__version__, prog_name="apidesc")
@click.option('--verbose', '-v', is_flag=True, help='Log each description step')
@click.pass_context
def cli(ctx, verbose: bool):
    """Static OpenAPI operation inference for HTTP handlers."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command('inspect')
@click.argument('target')
@click.option('--route', type=str, help='Route template (default: from the route decorator)')
@click.option('--method', type=str, help='HTTP method (overrides decorator metadata)')
@click.option('--app-name', type=str, help='Application name used for untagged free functions')
@click.option('--config', 'config_paths', multiple=True, help='JSON/YAML config file')
@click.option('--env-file', type=click.Path(), help='.env file with APIDESC_* settings')
@click.pass_context
def inspect_cmd(
    ctx,
    target: str,
    route: Optional[str],
    method: Optional[str],
    app_name: Optional[str],
    config_paths: tuple,
    env_file: Optional[str],
):
    """
    Describe TARGET and print its OpenAPI operation.

    Examples:
      apidesc inspect shop.handlers:get_item
      apidesc inspect shop.handlers:ItemsController.create --route /items
    """
    handler = _resolve_target(target)

    try:
        overrides = {"application_name": app_name} if app_name is not None else None
        loader = ConfigLoader.load(paths=list(config_paths), env_file=env_file, overrides=overrides)
        config = loader.to_describer_config()

        metadata = EndpointMetadata.from_callable(handler)
        if method:
            metadata = metadata.with_items(HttpMethodMetadata([method]))

        operation = OperationGenerator(config=config).describe(handler, route, metadata)
    except Fault as fault:
        _error(str(fault))
        sys.exit(2)

    if operation is None:
        _error(f"{target} is not describable (needs exactly one HTTP method and must not be excluded)")
        sys.exit(1)

    click.echo(json.dumps(operation.to_dict(), indent=2))


@cli.command('version')
def version():
    """Show version information."""
    click.echo(f"apidesc {__version__}")
    click.echo(f"Python {sys.version.split()[0]}")


def main():
    """Entry point for `apidesc` command."""
    cli(obj={})


if __name__ == '__main__':
    main()

"""CLI entry point for registry-credentials."""

import sys
from pathlib import Path

import click
import structlog

from registry_credentials.cli.credentials import (
    erase_credential,
    get_credential,
    store_credential,
    which_store,
)
from registry_credentials.config.config_file import ConfigFile
from registry_credentials.config.settings import CredentialSettings
from registry_credentials.credentials import (
    DynamicStore,
    get_docker_config_path,
    new_store,
    new_store_with_fallbacks,
)
from registry_credentials.exceptions import RegistryCredentialsError
from registry_credentials.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.json (default: $DOCKER_CONFIG/config.json or ~/.docker/config.json)",
)
@click.option(
    "--fallback-config",
    "fallback_configs",
    type=click.Path(dir_okay=False, path_type=Path),
    multiple=True,
    help="Additional config.json searched when the primary has no credential (repeatable)",
)
@click.option(
    "--allow-plaintext-put/--no-allow-plaintext-put",
    default=None,
    help="Allow saving credentials in plaintext when no credential helper is available",
)
@click.option("--log-level", default=None, help="Logging level")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    fallback_configs: tuple[Path, ...],
    allow_plaintext_put: bool | None,
    log_level: str | None,
) -> None:
    """regcred: manage registry credentials across credential helpers."""
    settings = CredentialSettings()
    configure_logging(log_level or settings.log_level)

    if allow_plaintext_put is not None:
        settings = settings.model_copy(update={"allow_plaintext_put": allow_plaintext_put})
    options = settings.to_store_options()

    try:
        path = config_path or settings.config_path or get_docker_config_path()
        dynamic_store = DynamicStore(ConfigFile.load(path), options, helper_timeout=settings.helper_timeout)
        fallbacks = [new_store(p, options, helper_timeout=settings.helper_timeout) for p in fallback_configs]
    except RegistryCredentialsError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("config_error", exc_info=True)
        sys.exit(1)

    log.debug("store_configured", config_path=str(path), fallbacks=len(fallbacks))
    ctx.obj = {
        "settings": settings,
        "dynamic_store": dynamic_store,
        "store": new_store_with_fallbacks(dynamic_store, *fallbacks),
    }


cli.add_command(get_credential)
cli.add_command(store_credential)
cli.add_command(erase_credential)
cli.add_command(which_store)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

"""CLI commands for registry credential management.

Commands:
    - get: Retrieve and display a credential (masked by default)
    - store: Save a username/password or identity token
    - erase: Remove a credential
    - which: Show which store serves a registry

The store behind these commands is built by the ``regcred`` group from the
config file and any fallback config files.

Example:
    Store and retrieve credentials::

        $ regcred store registry.example.com --username alice
        $ regcred get registry.example.com
        $ regcred which registry.example.com
"""

import sys
from typing import NoReturn

import click

from registry_credentials.credentials import (
    Credential,
    CredentialError,
    DynamicStore,
    FileStore,
    NativeStore,
)
from registry_credentials.exceptions import RegistryCredentialsError
from registry_credentials.utils.logging_config import get_logger

log = get_logger(__name__)


def _fail(e: RegistryCredentialsError) -> NoReturn:
    """Print a credential error with its suggestion and exit 1."""
    click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
    if isinstance(e, CredentialError) and e.suggestion:
        click.echo(click.style(f"Suggestion: {e.suggestion}", fg="yellow"), err=True)
    sys.exit(1)


def _mask(value: str) -> str:
    if len(value) > 8:
        return value[:4] + "*" * (len(value) - 8) + value[-4:]
    return "*" * len(value)


@click.command(name="get")
@click.argument("server_address")
@click.option("--show-secret", is_flag=True, help="Show full secret (default: masked)")
@click.pass_context
def get_credential(ctx: click.Context, server_address: str, show_secret: bool) -> None:
    """Retrieve and display the credential for SERVER_ADDRESS.

    Examples:

        regcred get registry.example.com

        regcred get registry.example.com --show-secret
    """
    store = ctx.obj["store"]
    try:
        cred = store.get(server_address)
    except RegistryCredentialsError as e:
        log.debug("get_failed", server_address=server_address, exc_info=True)
        _fail(e)

    if cred.is_empty:
        click.echo(click.style(f"No credential found for {server_address}", fg="yellow"))
        sys.exit(1)

    show = (lambda v: v) if show_secret else _mask
    if cred.username:
        click.echo(f"Username: {cred.username}")
    if cred.password:
        click.echo(f"Password: {show(cred.password)}")
    if cred.refresh_token:
        click.echo(f"Identity token: {show(cred.refresh_token)}")
    if cred.access_token:
        click.echo(f"Access token: {show(cred.access_token)}")
    if not show_secret:
        click.echo(click.style("Use --show-secret to display full secrets", fg="yellow"))


@click.command(name="store")
@click.argument("server_address")
@click.option("--username", "-u", help="Username")
@click.option("--password", "-p", help="Password (will prompt if a username is given)")
@click.option("--identity-token", help="Identity token instead of username/password")
@click.pass_context
def store_credential(
    ctx: click.Context,
    server_address: str,
    username: str | None,
    password: str | None,
    identity_token: str | None,
) -> None:
    """Save a credential for SERVER_ADDRESS.

    Examples:

        regcred store registry.example.com --username alice

        regcred store registry.example.com --identity-token "$TOKEN"
    """
    if identity_token and (username or password):
        raise click.UsageError("--identity-token cannot be combined with --username/--password")

    if identity_token:
        cred = Credential(refresh_token=identity_token)
    else:
        if not username:
            raise click.UsageError("Either --username or --identity-token is required")
        if password is None:
            password = click.prompt("Password", hide_input=True)
        cred = Credential(username=username, password=password)

    store = ctx.obj["store"]
    try:
        store.put(server_address, cred)
    except RegistryCredentialsError as e:
        log.debug("store_failed", server_address=server_address, exc_info=True)
        _fail(e)

    click.echo(click.style("Credential stored successfully", fg="green"))


@click.command(name="erase")
@click.argument("server_address")
@click.confirmation_option(prompt="Are you sure you want to delete this credential?")
@click.pass_context
def erase_credential(ctx: click.Context, server_address: str) -> None:
    """Delete the credential for SERVER_ADDRESS.

    Examples:

        regcred erase registry.example.com --yes
    """
    store = ctx.obj["store"]
    try:
        store.delete(server_address)
    except RegistryCredentialsError as e:
        log.debug("erase_failed", server_address=server_address, exc_info=True)
        _fail(e)

    click.echo(click.style("Credential deleted successfully", fg="green"))


@click.command(name="which")
@click.argument("server_address")
@click.pass_context
def which_store(ctx: click.Context, server_address: str) -> None:
    """Show which store serves SERVER_ADDRESS."""
    dynamic_store: DynamicStore = ctx.obj["dynamic_store"]
    store = dynamic_store.store_for(server_address)

    if isinstance(store, NativeStore):
        click.echo(f"native: {store.program}")
    elif isinstance(store, FileStore):
        mode = "read-only" if store.disable_put else "read-write"
        click.echo(f"file: {store.config.path} ({mode})")
    else:
        click.echo(type(store).__name__)

    if dynamic_store.detected_creds_store:
        click.echo(f"Detected default: {dynamic_store.detected_creds_store}")

"""Command-line interface for claude-oauth-setup."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import config_root_from_env
from .exceptions import CredentialsNotFoundError, StorageError
from .models import OAuthCredentials
from .storage import CredentialStore

config_dir_option = click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Config root override (default: $XDG_CONFIG_HOME, else ~/.claude is used)",
)


def _store(config_dir: Optional[Path]) -> CredentialStore:
    """Build a store, reading XDG_CONFIG_HOME only if no --config-dir was given."""
    return CredentialStore(config_dir if config_dir is not None else config_root_from_env())


def _mask(token: str) -> str:
    if len(token) <= 12:
        return "*" * len(token)
    return f"{token[:12]}..."


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
@click.version_option(version=__version__, prog_name="claude-oauth-setup")
def cli(ctx: click.Context, verbose: bool) -> None:
    """Claude OAuth credentials setup tool.

    Write OAuth tokens to the file the Claude CLI reads them from.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option(
    "--access-token",
    envvar="CLAUDE_ACCESS_TOKEN",
    required=True,
    help="OAuth access token (env: CLAUDE_ACCESS_TOKEN)",
)
@click.option(
    "--refresh-token",
    envvar="CLAUDE_REFRESH_TOKEN",
    required=True,
    help="OAuth refresh token (env: CLAUDE_REFRESH_TOKEN)",
)
@click.option(
    "--expires-at",
    envvar="CLAUDE_EXPIRES_AT",
    required=True,
    help="Expiry as a Unix timestamp (env: CLAUDE_EXPIRES_AT)",
)
@config_dir_option
def setup(
    access_token: str, refresh_token: str, expires_at: str, config_dir: Optional[Path]
) -> None:
    """Write OAuth credentials to the credentials file.

    Examples:

        # Pass tokens explicitly
        claude-oauth-setup setup --access-token "$AT" --refresh-token "$RT" \\
            --expires-at 1735689600000

        # Read tokens from CLAUDE_ACCESS_TOKEN, CLAUDE_REFRESH_TOKEN, CLAUDE_EXPIRES_AT
        claude-oauth-setup setup
    """
    store = _store(config_dir)

    try:
        credentials = OAuthCredentials.from_strings(access_token, refresh_token, expires_at)
        store.save(credentials)
    except StorageError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Error: Failed to write credentials file: {e}", err=True)
        sys.exit(1)

    click.echo(f"Credentials written to {store.credentials_file}")


@cli.command()
@config_dir_option
def show(config_dir: Optional[Path]) -> None:
    """Show the stored credentials (tokens are masked)."""
    store = _store(config_dir)

    try:
        credentials = store.load()
        expires_at = credentials.expires_at_datetime()
        expired = store.is_expired()
    except CredentialsNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except StorageError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Credentials file: {store.credentials_file}")
    click.echo("=" * 70)
    click.echo(f"Access Token:  {_mask(credentials.access_token)}")
    click.echo(f"Refresh Token: {_mask(credentials.refresh_token)}")
    click.echo(f"Expires At:    {expires_at.isoformat()}")
    click.echo(f"Status:        {'EXPIRED' if expired else 'Valid'}")
    click.echo(f"Scopes:        {' '.join(credentials.scopes)}")
    click.echo("=" * 70)

    if expired:
        click.echo("\nWarning: Access token has expired. Run 'claude-oauth-setup setup' again.")


@cli.command()
@config_dir_option
def path(config_dir: Optional[Path]) -> None:
    """Print the credentials file path."""
    click.echo(str(_store(config_dir).credentials_file))


@cli.command()
@config_dir_option
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
def delete(config_dir: Optional[Path], yes: bool) -> None:
    """Delete the credentials file."""
    store = _store(config_dir)

    if not store.exists():
        click.echo(f"Error: No credentials found at {store.credentials_file}.", err=True)
        sys.exit(1)

    if not yes:
        if not click.confirm(f"Delete {store.credentials_file}?"):
            click.echo("Cancelled.")
            return

    try:
        store.delete()
    except CredentialsNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Error: Failed to delete credentials file: {e}", err=True)
        sys.exit(1)

    click.echo("Credentials deleted successfully.")


def main() -> None:
    """Entry point for the CLI application."""
    cli()


if __name__ == "__main__":
    main()

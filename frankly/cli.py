"""
Command-line interface for the Frankly API.

Usage:
    frankly nonce
    frankly token --app-key KEY --app-secret SECRET
    frankly request GET rooms
    frankly request POST rooms --data '{"title": "Hi", "status": "active"}'
"""

import json
import logging
import sys
from typing import Optional

import click

from .auth import KeySecret
from .client import FranklyClient
from .config import FranklyConfig
from .exceptions import FranklyError, RequestError
from .identity import generate_identity_token

logger = logging.getLogger(__name__)

METHODS = ("GET", "POST", "PUT", "DELETE")


def fail(message: str) -> None:
    click.echo(click.style(f"✗ Error: {message}", fg="red"), err=True)
    sys.exit(1)


def parse_params(pairs: tuple[str, ...]) -> dict[str, str]:
    """Turn repeated ``key=value`` options into a dict."""
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--param")
        params[key] = value
    return params


@click.group()
@click.option("--base-url", envvar="FRANKLY_APP_HOST", default=None, help="API origin (https://...)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, base_url: Optional[str], debug: bool):
    """Frankly - chat platform REST API client"""
    logging.basicConfig(
        level=logging.DEBUG if debug else FranklyConfig().log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url


def make_client(ctx) -> FranklyClient:
    try:
        return FranklyClient(base_url=ctx.obj["base_url"])
    except FranklyError as e:
        fail(e.message)


@cli.command()
@click.pass_context
def nonce(ctx):
    """Fetch a fresh server nonce."""
    with make_client(ctx) as client:
        try:
            click.echo(client.nonce())
        except FranklyError as e:
            fail(e.message)


@cli.command()
@click.option("--app-key", envvar="FRANKLY_APP_KEY", required=True, help="Application key")
@click.option("--app-secret", envvar="FRANKLY_APP_SECRET", required=True, help="Application secret")
@click.option("--nonce", "nonce_value", default=None, help="Nonce to sign (fetched if omitted)")
@click.option("--user-id", default=None, help="User the token speaks for")
@click.option("--role", default=None, help="Role to claim, e.g. admin")
@click.pass_context
def token(ctx, app_key: str, app_secret: str, nonce_value: Optional[str],
          user_id: Optional[str], role: Optional[str]):
    """Sign an identity token."""
    try:
        if nonce_value is None:
            with make_client(ctx) as client:
                nonce_value = client.nonce(KeySecret(app_key, app_secret))
        click.echo(generate_identity_token(app_key, app_secret, nonce_value, user_id, role))
    except FranklyError as e:
        fail(e.message)


@cli.command()
@click.argument("method", type=click.Choice(METHODS, case_sensitive=False))
@click.argument("path")
@click.option("--param", "-p", "params", multiple=True, help="Query parameter key=value")
@click.option("--data", "-d", default=None, help="JSON request body")
@click.option("--app-key", envvar="FRANKLY_APP_KEY", required=True, help="Application key")
@click.option("--app-secret", envvar="FRANKLY_APP_SECRET", required=True, help="Application secret")
@click.pass_context
def request(ctx, method: str, path: str, params: tuple[str, ...], data: Optional[str],
            app_key: str, app_secret: str):
    """Send METHOD to PATH with an admin session and print the JSON reply."""
    query = parse_params(params)
    logger.debug(f"{method.upper()} {path} (params: {', '.join(sorted(query)) or 'none'})")
    try:
        payload = json.loads(data) if data is not None else None
    except ValueError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint="--data")

    with make_client(ctx) as client:
        try:
            client.open(KeySecret(app_key, app_secret))
            result = client.request(method.upper(), path, params=query, payload=payload)
        except RequestError as e:
            fail(f"HTTP {e.status_code}: {e.body}")
        except FranklyError as e:
            fail(e.message)

    if result is not None:
        click.echo(json.dumps(result, indent=2))


def main():
    cli(obj={})


if __name__ == "__main__":
    main()

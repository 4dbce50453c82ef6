"""
Command-line interface for XcooBee SDK.

Credentials are read from the environment (XCOOBEE_API_KEY, XCOOBEE_API_SECRET,
XCOOBEE_CAMPAIGN_ID, ...) or a .env file, see `XcooBeeSettings`. Every command
prints the response as JSON and exits with status 1 when the call failed.

Available commands:
- get-token: Fetch an API access token
- ping: Check the configuration against the XcooBee system
- list-campaigns: List the account's campaigns
- campaign-info: Show a campaign
- list-consents: List consents given to the account's campaigns
- request-consent: Request consent from a user
- list-bees: Search the bees the account can hire
- get-events: List the account's events
- upload-files: Upload files to the outbox
"""

import asyncio
import json
import logging
import sys

import click

from xcoobee_sdk.client import XcooBee
from xcoobee_sdk.config import XcooBeeSettings
from xcoobee_sdk.exceptions import XcooBeeError
from xcoobee_sdk.logging_middleware import LoggingMiddleware
from xcoobee_sdk.paging import PagingResponse
from xcoobee_sdk.resolver import resolve_config
from xcoobee_sdk.responses import ErrorResponse

logger = logging.getLogger("xcoobee_sdk.cli")


def _to_json(response) -> dict:
    if isinstance(response, ErrorResponse):
        return {"code": response.code, "error": {"message": response.error.message}}
    return {"code": response.code, "result": response.result}


async def _echo_pages(response, all_pages: bool):
    if isinstance(response, PagingResponse) and all_pages:
        async for page in response.iter_pages():
            click.echo(json.dumps(_to_json(page), indent=2, default=str))
        return
    click.echo(json.dumps(_to_json(response), indent=2, default=str))


def _run(call, all_pages: bool = False):
    """Runs `call(sdk)` against an SDK built from the environment."""

    async def _main():
        settings = XcooBeeSettings()
        middlewares = [LoggingMiddleware(level=logging.DEBUG)]
        async with XcooBee(settings=settings, middlewares=middlewares) as sdk:
            response = await call(sdk)
            await _echo_pages(response, all_pages)
            return response

    try:
        response = asyncio.run(_main())
    except XcooBeeError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)
    if isinstance(response, ErrorResponse):
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log HTTP exchanges")
def cli(verbose):
    """XcooBee SDK CLI"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@cli.command()
def get_token():
    """Fetch an API access token for the configured key and secret."""

    async def _get_token():
        settings = XcooBeeSettings()
        async with XcooBee(settings=settings) as sdk:
            config = resolve_config(None, sdk.config)
            return await sdk.token_cache.get(
                config.api_url_root, config.api_key, config.api_secret
            )

    try:
        token = asyncio.run(_get_token())
    except XcooBeeError as exc:
        click.echo(f"Failed to get token: {exc.message}", err=True)
        sys.exit(1)
    click.echo(token)


@cli.command()
def ping():
    """Check that the configuration connects to the XcooBee system."""
    _run(lambda sdk: sdk.system.ping())


@cli.command()
@click.option("--limit", type=int, default=None, help="Page size")
@click.option("--all", "all_pages", is_flag=True, help="Fetch every page")
def list_campaigns(limit, all_pages):
    """List the account's campaigns."""
    _run(lambda sdk: sdk.consents.list_campaigns(limit=limit), all_pages)


@cli.command()
@click.option("--campaign-id", default=None, help="Defaults to XCOOBEE_CAMPAIGN_ID")
def campaign_info(campaign_id):
    """Show the basic information of a campaign."""
    _run(lambda sdk: sdk.consents.get_campaign_info(campaign_id))


@cli.command()
@click.option("--status", "statuses", multiple=True, help="Consent status, repeatable")
@click.option("--limit", type=int, default=None, help="Page size")
@click.option("--all", "all_pages", is_flag=True, help="Fetch every page")
def list_consents(statuses, limit, all_pages):
    """List consents given to the account's campaigns."""
    _run(
        lambda sdk: sdk.consents.list_consents(list(statuses) or None, limit=limit),
        all_pages,
    )


@cli.command()
@click.option("--xcoobee-id", required=True, help="XcooBee ID of the user, e.g. ~SomeUser")
@click.option("--reference", default=None, help="Your reference for the request")
@click.option("--campaign-id", default=None, help="Defaults to XCOOBEE_CAMPAIGN_ID")
def request_consent(xcoobee_id, reference, campaign_id):
    """Request consent from a user."""
    _run(lambda sdk: sdk.consents.request_consent(xcoobee_id, reference, campaign_id))


@cli.command()
@click.argument("search_text", required=False)
@click.option("--limit", type=int, default=None, help="Page size")
@click.option("--all", "all_pages", is_flag=True, help="Fetch every page")
def list_bees(search_text, limit, all_pages):
    """Search the bees the account can hire."""
    _run(lambda sdk: sdk.bees.list_bees(search_text, limit=limit), all_pages)


@cli.command()
@click.option("--limit", type=int, default=None, help="Page size")
@click.option("--all", "all_pages", is_flag=True, help="Fetch every page")
def get_events(limit, all_pages):
    """List the account's events."""
    _run(lambda sdk: sdk.system.get_events(limit=limit), all_pages)


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def upload_files(files):
    """Upload files to the account's outbox."""
    _run(lambda sdk: sdk.bees.upload_files(list(files)))


if __name__ == "__main__":
    cli()

"""
Mecene CLI.

Usage:
    mecene campaigns list [--limit N] [--skip N]
    mecene campaigns get CAMPAIGN_ID
    mecene campaigns mine ADDRESS [--page N] [--per-page N] [--follow]
    mecene milestones list CAMPAIGN_ID [--limit N] [--skip N]
    mecene donations watch CAMPAIGN_ID [--once]
"""

import asyncio
import sys
from typing import Awaitable, Callable

import click

from mecene.config.settings import get_settings
from mecene.di.container import DIContainer
from mecene.domain.entities.campaign import Campaign
from mecene.domain.exceptions import MeceneException
from mecene.domain.services.i_subscription import ISubscription
from mecene.infrastructure.monitoring.logger import setup_logging


def _run(command: Callable[[DIContainer], Awaitable[None]]) -> None:
    """Run an async command against a fresh container."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

    async def main() -> None:
        container = DIContainer(settings)
        try:
            await command(container)
        finally:
            await container.shutdown()

    try:
        asyncio.run(main())
    except MeceneException as e:
        click.echo(f"Error [{e.code}]: {e.message}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        pass


async def _consume(
    subscription: ISubscription, render: Callable, follow: bool
) -> None:
    try:
        async for emission in subscription:
            render(emission)
            if not follow:
                break
    finally:
        await subscription.cancel()


def _campaign_line(campaign: Campaign) -> str:
    created = campaign.created_at.isoformat() if campaign.created_at else "-"
    return (
        f"{campaign.id}  {campaign.status.value:<8}  {created}  {campaign.title}"
    )


@click.group()
def cli():
    """Mecene - crowdfunding campaign data access."""


@cli.group()
def campaigns():
    """Campaign commands."""


@campaigns.command("list")
@click.option("--limit", default=100, show_default=True, help="Records to load")
@click.option("--skip", default=0, show_default=True, help="Records to skip")
def list_campaigns(limit, skip):
    """List active campaigns, newest first."""

    async def command(container: DIContainer) -> None:
        page = await container.campaign_service.get_campaigns(limit, skip)
        for campaign in page:
            click.echo(_campaign_line(campaign))
        click.echo(f"{len(page)} of {page.total} active campaigns")

    _run(command)


@campaigns.command("get")
@click.argument("campaign_id")
def get_campaign(campaign_id):
    """Show one campaign."""

    async def command(container: DIContainer) -> None:
        campaign = await container.campaign_service.get(campaign_id)
        for key, value in campaign.to_dict().items():
            click.echo(f"{key:<18}{value}")

    _run(command)


@campaigns.command("mine")
@click.argument("address")
@click.option("--page", default=0, show_default=True, help="Pages to skip")
@click.option("--per-page", default=20, show_default=True, help="Page size")
@click.option("--follow", is_flag=True, help="Keep printing on every change")
def user_campaigns(address, page, per_page, follow):
    """List campaigns owned or reviewed by ADDRESS."""

    def render(result) -> None:
        for campaign in result:
            click.echo(_campaign_line(campaign))
        click.echo(f"{len(result)} of {result.total} campaigns")

    async def command(container: DIContainer) -> None:
        subscription = container.campaign_service.get_user_campaigns(
            address, page, per_page
        )
        await _consume(subscription, render, follow)

    _run(command)


@cli.group()
def milestones():
    """Milestone commands."""


@milestones.command("list")
@click.argument("campaign_id")
@click.option("--limit", default=100, show_default=True, help="Records to load")
@click.option("--skip", default=0, show_default=True, help="Records to skip")
def list_milestones(campaign_id, limit, skip):
    """List a campaign's visible milestones."""

    async def command(container: DIContainer) -> None:
        page = await container.campaign_service.get_milestones(
            campaign_id, limit, skip
        )
        for record in page:
            click.echo(
                f"{record.get('_id')}  {record.get('status', '-'):<12}  "
                f"{record.get('title', '')}"
            )
        click.echo(f"{len(page)} of {page.total} milestones")

    _run(command)


@cli.group()
def donations():
    """Donation commands."""


@donations.command("watch")
@click.argument("campaign_id")
@click.option("--once", is_flag=True, help="Print the current list and exit")
def watch_donations(campaign_id, once):
    """Print a campaign's donations on every change."""

    def render(result) -> None:
        click.echo(f"--- {len(result)} donations")
        for donation in result:
            click.echo(
                f"{donation.id}  {donation.amount:>24}  {donation.giver_name}"
            )

    async def command(container: DIContainer) -> None:
        subscription = container.campaign_service.subscribe_donations(campaign_id)
        await _consume(subscription, render, follow=not once)

    _run(command)


if __name__ == "__main__":
    cli()

"""
Campaign service.

Data-access facade for campaigns and their milestones and donations.
Reads go to the store; creating and cancelling campaigns goes through
the campaign contracts and is mirrored into the store.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, List, Optional

from mecene.application import queries
from mecene.application.transaction_monitor import (
    TransactionMonitor,
    serialize_error,
)
from mecene.domain.entities.campaign import Campaign, CampaignStatus
from mecene.domain.entities.chain_transaction import (
    ChainTransaction,
    TransactionStatus,
)
from mecene.domain.entities.donation import Donation
from mecene.domain.exceptions import CampaignNotFoundError
from mecene.domain.services.i_campaign_contracts import (
    CampaignContractFactory,
    ISentTransaction,
)
from mecene.domain.services.i_error_reporter import IErrorReporter
from mecene.domain.services.i_network_provider import (
    IChainClientProvider,
    INetworkProvider,
)
from mecene.domain.services.i_store import IStoreClient
from mecene.domain.services.i_subscription import ISubscription
from mecene.domain.value_objects.page import Page

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = (
    "Something went wrong with the transaction. Is your wallet unlocked?"
)
STORE_CREATE_FAILED_MESSAGE = "Something went wrong with storing your campaign"
CANCEL_FAILED_MESSAGE = "Something went wrong with cancelling your campaign"
STORE_UPDATE_FAILED_MESSAGE = "Something went wrong with updating campaign"
CALLBACK_FAILED_MESSAGE = "Something went wrong after sending your transaction"

Callback = Optional[Callable[..., Any]]


class CampaignService:
    """
    Campaign data-access service.

    Stateless: every call builds its own requests and subscriptions.
    All collaborators are injected.
    """

    def __init__(
        self,
        store: IStoreClient,
        network_provider: INetworkProvider,
        chain_client_provider: IChainClientProvider,
        campaign_contract_factory: CampaignContractFactory,
        error_reporter: IErrorReporter,
    ):
        """
        Initialize service with dependencies.

        Args:
            store: Real-time query service client
            network_provider: Resolves campaign factory and explorer URL
            chain_client_provider: Resolves the raw chain client
            campaign_contract_factory: Binds (chain client, address) to a
                campaign contract wrapper
            error_reporter: Side channel for user-visible errors
        """
        self.store = store
        self.network_provider = network_provider
        self.chain_client_provider = chain_client_provider
        self.campaign_contract_factory = campaign_contract_factory
        self.error_reporter = error_reporter
        self.monitor = TransactionMonitor(error_reporter)

    # ================================================================
    # Reads
    # ================================================================

    async def get(self, campaign_id: str) -> Campaign:
        """
        Get a campaign by id.

        Raises:
            CampaignNotFoundError: If no campaign matches
            StoreError: If the store request fails
        """
        response = await self.store.service(queries.CAMPAIGNS).find(
            queries.campaign_by_id(campaign_id)
        )
        page = Page.from_response(response)

        if not page.data:
            raise CampaignNotFoundError(campaign_id)

        return Campaign.from_record(page.data[0])

    async def get_campaigns(
        self, limit: int = queries.DEFAULT_LIMIT, skip: int = 0
    ) -> Page[Campaign]:
        """
        List active campaigns, newest first.

        Args:
            limit: Amount of records to load
            skip: Amount of records to skip

        Returns:
            Page of campaigns with the total count of active campaigns
        """
        response = await self.store.service(queries.CAMPAIGNS).find(
            queries.active_campaigns(limit, skip)
        )
        return Page.from_response(response).map(Campaign.from_record)

    async def get_milestones(
        self,
        campaign_id: str,
        limit: int = queries.DEFAULT_LIMIT,
        skip: int = 0,
    ) -> Page[dict]:
        """
        List a campaign's visible milestones, newest first.

        Canceled, proposed, rejected and pending milestones are excluded.

        Returns:
            Page of raw milestone records
        """
        response = await self.store.service(queries.MILESTONES).find(
            queries.visible_milestones(campaign_id, limit, skip)
        )
        return Page.from_response(response)

    # ================================================================
    # Subscriptions
    # ================================================================

    def subscribe_donations(self, campaign_id: str) -> ISubscription[List[Donation]]:
        """
        Subscribe to a campaign's donations.

        Every emission carries the full current list, newest first,
        returned donations excluded, with giver details expanded.

        Returns:
            Subscription owned by the caller
        """
        subscription = self.store.service(queries.DONATIONS).watch(
            queries.campaign_donations(campaign_id),
            params={"schema": queries.DONATION_DETAILS_SCHEMA},
            list_strategy="always",
        )
        return subscription.map(
            lambda response: [
                Donation.from_record(record)
                for record in Page.from_response(response).data
            ]
        )

    def get_user_campaigns(
        self,
        user_address: str,
        skip_pages: int,
        items_per_page: int,
    ) -> ISubscription[Page[Campaign]]:
        """
        Subscribe to the campaigns a user owns or reviews.

        Args:
            user_address: Owner or reviewer address
            skip_pages: Amount of pages to skip
            items_per_page: Page size

        Returns:
            Subscription of campaign pages owned by the caller
        """
        subscription = self.store.service(queries.CAMPAIGNS).watch(
            queries.user_campaigns(user_address, skip_pages, items_per_page),
            list_strategy="always",
        )
        return subscription.map(
            lambda response: Page.from_response(response).map(Campaign.from_record)
        )

    # ================================================================
    # Mutations
    # ================================================================

    async def save(
        self,
        campaign: Campaign,
        from_address: str,
        after_create: Callback = None,
        after_mined: Callback = None,
    ) -> Optional[ChainTransaction]:
        """
        Deploy a new campaign, or update an existing one in the store.

        Existing campaigns are patched in the store only; after_mined is
        then called without arguments. New campaigns are deployed through
        the campaign factory: after_create(link, id) runs once the store
        record exists, after_mined(link) once the transaction is mined.

        Args:
            campaign: Campaign to save
            from_address: Address of the user creating the campaign
            after_create: Called after the campaign is stored
            after_mined: Called after the transaction is mined

        Returns:
            None for updates, the deployment transaction otherwise

        Raises:
            StoreError: If updating an existing campaign fails
        """
        if not campaign.is_draft:
            await self.store.service(queries.CAMPAIGNS).patch(
                campaign.id, campaign.to_store_record()
            )
            await _invoke(after_mined)
            return None

        async def send(tx: ChainTransaction) -> ISentTransaction:
            network = await self.network_provider.get_network()
            tx.explorer_url = network.explorer_url

            # LPPCampaignFactory.newCampaign(name, url, parentProject, reviewer)
            return await network.campaign_factory.new_campaign(
                campaign.title,
                "",
                0,
                campaign.reviewer_address,
                from_address,
            )

        async def on_hash(tx: ChainTransaction) -> None:
            try:
                created = await self.store.service(queries.CAMPAIGNS).create(
                    campaign.to_store_record(tx.tx_hash)
                )
            except Exception as e:
                logger.error(f"Failed to store campaign {tx.tx_hash}: {e}")
                await self.error_reporter.report(
                    STORE_CREATE_FAILED_MESSAGE, serialize_error(e), fatal=False
                )
                return

            await self._notify_created(after_create, tx.link, created.get("_id"))

        tx = await self.monitor.run(
            ChainTransaction(operation="save"),
            send,
            on_hash,
            SAVE_FAILED_MESSAGE,
        )
        if tx.status == TransactionStatus.CONFIRMED:
            await _invoke(after_mined, tx.link)
        return tx

    async def cancel(
        self,
        campaign: Campaign,
        from_address: str,
        after_create: Callback = None,
        after_mined: Callback = None,
    ) -> ChainTransaction:
        """
        Cancel a campaign on chain and mark it canceled in the store.

        Args:
            campaign: Deployed campaign to cancel
            from_address: Address of the user cancelling the campaign
            after_create: Called with the link once the store is updated
            after_mined: Called with the link once the transaction is mined

        Returns:
            The cancel transaction
        """

        async def send(tx: ChainTransaction) -> ISentTransaction:
            network, chain_client = await asyncio.gather(
                self.network_provider.get_network(),
                self.chain_client_provider.get_chain_client(),
            )
            tx.explorer_url = network.explorer_url

            contract = self.campaign_contract_factory(
                chain_client, campaign.plugin_address
            )
            return await contract.cancel_campaign(from_address)

        async def on_hash(tx: ChainTransaction) -> None:
            try:
                await self.store.service(queries.CAMPAIGNS).patch(
                    campaign.id,
                    {"status": CampaignStatus.CANCELED.value, "mined": False},
                )
            except Exception as e:
                logger.error(f"Failed to mark campaign {campaign.id} canceled: {e}")
                await self.error_reporter.report(
                    STORE_UPDATE_FAILED_MESSAGE, serialize_error(e), fatal=False
                )
                return

            await self._notify_created(after_create, tx.link)

        tx = await self.monitor.run(
            ChainTransaction(operation="cancel"),
            send,
            on_hash,
            CANCEL_FAILED_MESSAGE,
        )
        if tx.status == TransactionStatus.CONFIRMED:
            await _invoke(after_mined, tx.link)
        return tx

    async def _notify_created(self, after_create: Callback, *args: Any) -> None:
        """
        Run after_create without letting it fail the transaction.

        Errors are logged and reported as non-fatal; mining is still
        awaited and after_mined still fires.
        """
        try:
            await _invoke(after_create, *args)
        except Exception as e:
            logger.error(f"after_create callback failed: {e}", exc_info=True)
            await self.error_reporter.report(
                CALLBACK_FAILED_MESSAGE, serialize_error(e), fatal=False
            )


async def _invoke(callback: Callback, *args: Any) -> None:
    """Call an optional sync or async callback."""
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result

"""
Dependency Injection Container for Mecene.

Manages all service instances and their dependencies.
"""

from functools import partial
from typing import Optional

from mecene.application.services.campaign_service import CampaignService
from mecene.config.settings import Settings, get_settings
from mecene.domain.services.i_error_reporter import IErrorReporter
from mecene.infrastructure.blockchain.contracts import CampaignContract
from mecene.infrastructure.blockchain.network_provider import (
    Web3NetworkProvider,
)
from mecene.infrastructure.notifications.courier_client import CourierClient
from mecene.infrastructure.notifications.error_reporter import (
    CourierErrorReporter,
    LoggingErrorReporter,
)
from mecene.infrastructure.store.feathers_client import FeathersClient


class DIContainer:
    """
    Dependency Injection Container.

    Lazily builds singleton adapters from settings and wires them
    into the campaign service.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize container with None instances.

        Args:
            settings: Settings override (defaults to global settings)
        """
        self._settings = settings

        # Infrastructure
        self._store: Optional[FeathersClient] = None
        self._network_provider: Optional[Web3NetworkProvider] = None
        self._courier_client: Optional[CourierClient] = None
        self._error_reporter: Optional[IErrorReporter] = None

        # Application services
        self._campaign_service: Optional[CampaignService] = None

    @property
    def settings(self) -> Settings:
        """Get settings."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._store:
            await self._store.close()

        if self._network_provider:
            await self._network_provider.close()

        if self._courier_client:
            await self._courier_client.close()

    # Infrastructure Getters

    @property
    def store(self) -> FeathersClient:
        """Get store client instance."""
        if self._store is None:
            self._store = FeathersClient(
                base_url=self.settings.STORE_URL,
                realtime_url=self.settings.STORE_REALTIME_URL,
                timeout=self.settings.STORE_TIMEOUT,
            )
        return self._store

    @property
    def network_provider(self) -> Web3NetworkProvider:
        """Get network and chain client provider instance."""
        if self._network_provider is None:
            self._network_provider = Web3NetworkProvider(
                rpc_url=self.settings.ETH_RPC_URL,
                network=self.settings.ETH_NETWORK,
                campaign_factory_address=self.settings.CAMPAIGN_FACTORY_ADDRESS,
                explorer_url=self.settings.EXPLORER_URL,
                receipt_timeout=self.settings.RECEIPT_TIMEOUT,
                poll_latency=self.settings.RECEIPT_POLL_INTERVAL,
                request_timeout=self.settings.RPC_TIMEOUT,
            )
        return self._network_provider

    @property
    def courier_client(self) -> CourierClient:
        """Get Courier client instance."""
        if self._courier_client is None:
            self._courier_client = CourierClient(
                courier_url=self.settings.COURIER_URL,
                timeout=self.settings.COURIER_TIMEOUT,
            )
        return self._courier_client

    @property
    def error_reporter(self) -> IErrorReporter:
        """Get error reporter (Courier popups or logs only)."""
        if self._error_reporter is None:
            if self.settings.ERROR_REPORTING_ENABLED:
                self._error_reporter = CourierErrorReporter(
                    courier_client=self.courier_client,
                    channel=self.settings.COURIER_ERROR_CHANNEL,
                )
            else:
                self._error_reporter = LoggingErrorReporter()
        return self._error_reporter

    # Application Service Getters

    @property
    def campaign_service(self) -> CampaignService:
        """Get campaign service instance."""
        if self._campaign_service is None:
            self._campaign_service = CampaignService(
                store=self.store,
                network_provider=self.network_provider,
                chain_client_provider=self.network_provider,
                campaign_contract_factory=partial(
                    CampaignContract,
                    receipt_timeout=self.settings.RECEIPT_TIMEOUT,
                    poll_latency=self.settings.RECEIPT_POLL_INTERVAL,
                ),
                error_reporter=self.error_reporter,
            )
        return self._campaign_service


_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get or initialize global container singleton."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Reset container to force re-initialization (for testing)."""
    global _container
    _container = None

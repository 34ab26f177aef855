"""
Test fixtures and configuration.

Wires the campaign service to the in-memory store and to mocked chain
collaborators.
"""

from unittest.mock import AsyncMock

import pytest
from helpers.fakes import InMemoryStoreClient

from mecene.application.services.campaign_service import CampaignService
from mecene.config.settings import reset_settings
from mecene.domain.services.i_error_reporter import IErrorReporter
from mecene.domain.value_objects.network import Network

EXPLORER_URL = "https://sepolia.etherscan.io/"


@pytest.fixture(autouse=True)
def clean_settings():
    """Drop cached settings between tests."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def store() -> InMemoryStoreClient:
    """Empty in-memory store."""
    return InMemoryStoreClient()


@pytest.fixture
def error_reporter() -> AsyncMock:
    """Error reporter recording reports."""
    return AsyncMock(spec=IErrorReporter)


@pytest.fixture
def campaign_factory() -> AsyncMock:
    """Campaign factory contract mock."""
    return AsyncMock()


@pytest.fixture
def network_provider(campaign_factory) -> AsyncMock:
    """Network provider resolving a sepolia network."""
    provider = AsyncMock()
    provider.get_network.return_value = Network(
        name="sepolia",
        campaign_factory=campaign_factory,
        explorer_url=EXPLORER_URL,
    )
    return provider


@pytest.fixture
def chain_client_provider() -> AsyncMock:
    """Chain client provider resolving an opaque client."""
    provider = AsyncMock()
    provider.get_chain_client.return_value = object()
    return provider


@pytest.fixture
def campaign_contract() -> AsyncMock:
    """Deployed campaign contract mock."""
    return AsyncMock()


@pytest.fixture
def contract_bindings() -> list:
    """Records (chain client, address) pairs the service binds."""
    return []


@pytest.fixture
def campaign_service(
    store,
    network_provider,
    chain_client_provider,
    campaign_contract,
    contract_bindings,
    error_reporter,
) -> CampaignService:
    """Campaign service wired to fakes."""

    def bind(chain_client, address):
        contract_bindings.append((chain_client, address))
        return campaign_contract

    return CampaignService(
        store=store,
        network_provider=network_provider,
        chain_client_provider=chain_client_provider,
        campaign_contract_factory=bind,
        error_reporter=error_reporter,
    )

"""
SDK entry point wiring configuration, collaborators and services.
"""

import logging
from typing import Optional

from .account import Account
from .adapter_factory import AdapterFactory
from .api import ApiClient
from .config import NetworkConfig, Settings
from .contract_factory import Web3ContractFactory
from .error_handler import ErrorHandler
from .interfaces import IApiClient, IContractFactory
from .listings import Listings
from .loans import Loans
from .types import ConfigurationError

logger = logging.getLogger(__name__)


class NftfiClient:
    """
    Client for NFTfi loans and listings.

    Example:
        async with NftfiClient.from_settings() as nftfi:
            await nftfi.loans.repay({"loan": {"id": 2}, "nftfi": {"contract": {"name": "v2-3.loan.fixed"}}})
    """

    def __init__(self, config: NetworkConfig, account: Account,
                 api: IApiClient, contract_factory: IContractFactory,
                 adapter_factory: Optional[AdapterFactory] = None,
                 error: Optional[ErrorHandler] = None):
        self.config = config
        self.account = account
        self.api = api
        self.contract_factory = contract_factory
        self.error = error or ErrorHandler()

        adapter_factory = adapter_factory or AdapterFactory()
        self.adapters = adapter_factory.create_all(config, contract_factory)

        self.loans = Loans(api, account, config, self.adapters, error=self.error)
        self.listings = Listings(api, config, error=self.error)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None,
                      error: Optional[ErrorHandler] = None) -> "NftfiClient":
        """
        Build a client from environment settings.

        Raises:
            ConfigurationError: If the chain is unknown or no RPC URL is set
        """
        settings = settings or Settings()
        config = settings.network_config()

        if settings.private_key:
            account = Account.from_private_key(settings.private_key)
        else:
            account = Account(address=settings.account_address)

        if not settings.rpc_url:
            raise ConfigurationError("NFTFI_RPC_URL is required", field="config.rpc_url")

        logger.info(f"Creating NFTfi client for {config.name} (chain {config.chain_id})")
        return cls(
            config=config,
            account=account,
            api=ApiClient(config.api, timeout=settings.request_timeout),
            contract_factory=Web3ContractFactory(
                account,
                rpc_url=settings.rpc_url,
                receipt_timeout=settings.receipt_timeout,
            ),
            error=error,
        )

    async def close(self):
        """Release HTTP and RPC connections"""
        if hasattr(self.api, "close"):
            await self.api.close()
        if hasattr(self.contract_factory, "disconnect"):
            await self.contract_factory.disconnect()

    async def __aenter__(self) -> "NftfiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

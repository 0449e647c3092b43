"""
Loan adapter factory mapping contract versions to adapters.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Type

from .adapters import (
    BaseLoanAdapter,
    LoanFixedV1Adapter,
    LoanFixedV2Adapter,
    LoanFixedV2_1Adapter,
    LoanFixedV2_3Adapter,
    LoanFixedCollectionV2Adapter,
    LoanFixedCollectionV2_3Adapter,
)
from .config import NetworkConfig
from .interfaces import IContractFactory
from .types import ContractName, ConfigurationError

logger = logging.getLogger(__name__)


class AdapterFactory:
    """
    Factory for creating loan contract adapters.

    Registrations are per instance; DEFAULT_ADAPTERS is never modified.
    """

    # Default mapping of contract versions to adapter classes
    DEFAULT_ADAPTERS: Mapping[ContractName, Type[BaseLoanAdapter]] = MappingProxyType({
        ContractName.V1_FIXED: LoanFixedV1Adapter,
        ContractName.V2_FIXED: LoanFixedV2Adapter,
        ContractName.V2_1_FIXED: LoanFixedV2_1Adapter,
        ContractName.V2_3_FIXED: LoanFixedV2_3Adapter,
        ContractName.V2_FIXED_COLLECTION: LoanFixedCollectionV2Adapter,
        ContractName.V2_3_FIXED_COLLECTION: LoanFixedCollectionV2_3Adapter,
    })

    def __init__(self, adapters: Optional[Mapping[ContractName, Type[BaseLoanAdapter]]] = None):
        self._adapters: Dict[ContractName, Type[BaseLoanAdapter]] = dict(
            self.DEFAULT_ADAPTERS if adapters is None else adapters
        )

    def create_adapter(self, name: ContractName, network: NetworkConfig,
                       contract_factory: IContractFactory) -> BaseLoanAdapter:
        """
        Create an adapter for one contract version.

        Args:
            name: Contract version
            network: Network parameter table holding the contract address and ABI
            contract_factory: Backend used to create the contract handle lazily

        Returns:
            Adapter instance; no I/O is performed

        Raises:
            ConfigurationError: If the version has no adapter or no contract entry
        """
        if name not in self._adapters:
            raise ConfigurationError(f"No adapter registered for {name.value}", field="nftfi.contract.name")

        adapter_class = self._adapters[name]
        return adapter_class(network.contract(name), contract_factory)

    def create_all(self, network: NetworkConfig,
                   contract_factory: IContractFactory) -> Mapping[ContractName, BaseLoanAdapter]:
        """
        Build the dispatch table for every contract version.

        Raises:
            ConfigurationError: If any ContractName lacks an adapter class or a
                contract entry on this network
        """
        missing = [name.value for name in ContractName if name not in self._adapters]
        if missing:
            raise ConfigurationError(f"No adapter registered for {', '.join(missing)}", field="nftfi.contract.name")

        return MappingProxyType({
            name: self.create_adapter(name, network, contract_factory)
            for name in ContractName
        })

    def register_adapter(self, name: ContractName, adapter_class: Type[BaseLoanAdapter]):
        """
        Register a custom adapter implementation for a contract version.

        Args:
            name: The contract version
            adapter_class: The adapter class to use
        """
        self._adapters[name] = adapter_class
        logger.info(f"Registered adapter {adapter_class.__name__} for {name.value}")

    def get_supported_contracts(self) -> List[ContractName]:
        """Get list of supported contract versions"""
        return list(self._adapters.keys())

    def is_contract_supported(self, name: ContractName) -> bool:
        """Check if a contract version is supported"""
        return name in self._adapters

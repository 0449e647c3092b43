"""
Network parameter tables and SDK settings.

The built-in tables are immutable and shared by reference; use
``load_network_config`` to derive a table with overrides.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .abis import (
    LOAN_FIXED_V1_ABI,
    LOAN_FIXED_V2_ABI,
    LOAN_FIXED_COLLECTION_V2_ABI,
    LOAN_FIXED_COLLECTION_V2_3_ABI,
)
from .types import ContractName, ConfigurationError
from .utils import same_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractConfig:
    """Deployed loan contract"""
    name: ContractName
    address: str
    abi: Tuple[Dict[str, Any], ...]


@dataclass(frozen=True)
class CurrencyConfig:
    """ERC20 loan currency"""
    address: str
    symbol: str
    unit: str


@dataclass(frozen=True)
class PaginationConfig:
    limit: int = 20
    page: int = 1


@dataclass(frozen=True)
class ApiConfig:
    base_uri: str
    key: Optional[str] = None


@dataclass(frozen=True)
class NetworkConfig:
    """Static parameters for one chain"""
    chain_id: int
    name: str
    api: ApiConfig
    contracts: Mapping[ContractName, ContractConfig]
    currencies: Tuple[CurrencyConfig, ...] = ()
    pagination: PaginationConfig = field(default_factory=PaginationConfig)

    def contract(self, name: ContractName) -> ContractConfig:
        """Get the contract entry for a version, raising if it is missing"""
        try:
            return self.contracts[name]
        except KeyError:
            raise ConfigurationError(
                f"No {name.value} contract configured for chain {self.chain_id}",
                field="config.contracts",
            )

    def currency_by_address(self, address: Optional[str]) -> Optional[CurrencyConfig]:
        for currency in self.currencies:
            if same_address(currency.address, address):
                return currency
        return None


def _contracts(addresses: Dict[ContractName, str]) -> Mapping[ContractName, ContractConfig]:
    abis = {
        ContractName.V1_FIXED: LOAN_FIXED_V1_ABI,
        ContractName.V2_FIXED: LOAN_FIXED_V2_ABI,
        ContractName.V2_1_FIXED: LOAN_FIXED_V2_ABI,
        ContractName.V2_3_FIXED: LOAN_FIXED_V2_ABI,
        ContractName.V2_FIXED_COLLECTION: LOAN_FIXED_COLLECTION_V2_ABI,
        ContractName.V2_3_FIXED_COLLECTION: LOAN_FIXED_COLLECTION_V2_3_ABI,
    }
    return MappingProxyType({
        name: ContractConfig(name=name, address=address, abi=tuple(abis[name]))
        for name, address in addresses.items()
    })


MAINNET = NetworkConfig(
    chain_id=1,
    name="mainnet",
    api=ApiConfig(base_uri="https://sdk-api.nftfi.com"),
    contracts=_contracts({
        ContractName.V1_FIXED: "0x88341d1a8F672D2780C8dC725902AAe72F143B0c",
        ContractName.V2_FIXED: "0xf896527c49b44aAb3Cf22aE356Fa3AF8E331F280",
        ContractName.V2_1_FIXED: "0x8252Df1d8b29057d1Afe3062bf5a64D503152BC8",
        ContractName.V2_3_FIXED: "0xd0a40eB7FD94eE97102BA8e9342243A2b2E22207",
        ContractName.V2_FIXED_COLLECTION: "0xE52Cec0E90115AbeB3304BaA36bc2655731f7934",
        ContractName.V2_3_FIXED_COLLECTION: "0xD0C6e59B50C32530C627107F50Acc71958C4341F",
    }),
    currencies=(
        CurrencyConfig("0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2", "wETH", "ether"),
        CurrencyConfig("0x6b175474e89094c44da98b954eedeac495271d0f", "DAI", "ether"),
        CurrencyConfig("0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48", "USDC", "mwei"),
    ),
)

GOERLI = NetworkConfig(
    chain_id=5,
    name="goerli",
    api=ApiConfig(base_uri="https://goerli-integration-sdk-api.nftfi.com"),
    contracts=_contracts({
        ContractName.V1_FIXED: "0x0000000000000000000000000000000000000000",
        ContractName.V2_FIXED: "0x2ffF031e525a20fcF8944aC7Cf3Bdcc3b19a6D77",
        ContractName.V2_1_FIXED: "0x77097f421CEb2454eB5F77898d25159ff3C7381d",
        ContractName.V2_3_FIXED: "0x2f42800C426237e535cA9eCccdC38F794f26F6e3",
        ContractName.V2_FIXED_COLLECTION: "0x06aE278EaE3A87d06652843Ac90d03e3E0d2E3f5",
        ContractName.V2_3_FIXED_COLLECTION: "0xdA1FfB0Bf2cE637FF12CA31C841Ced04b6483CfD",
    }),
    currencies=(
        CurrencyConfig("0xb4fbf271143f4fbf7b91a5ded31805e42b2208d6", "wETH", "ether"),
        CurrencyConfig("0x11fe4b6ae13d2a6055c8d9cf65c55bac32b5d844", "DAI", "ether"),
        CurrencyConfig("0x07865c6e87b9f70255377e024ace6630c1eaa37f", "USDC", "mwei"),
    ),
)

NETWORKS: Mapping[int, NetworkConfig] = MappingProxyType({
    MAINNET.chain_id: MAINNET,
    GOERLI.chain_id: GOERLI,
})


def load_network_config(chain_id: int, overrides: Optional[Dict[str, Any]] = None) -> NetworkConfig:
    """
    Get the parameter table for a chain.

    Args:
        chain_id: EVM chain id
        overrides: Optional ``api_key``, ``api_base_uri``, ``pagination``
            (``{"limit", "page"}``) and ``contracts`` (contract name -> address)

    Returns:
        A NetworkConfig; the built-in table is returned as-is when there are
        no overrides

    Raises:
        ConfigurationError: If the chain is unknown or an override is invalid
    """
    base = NETWORKS.get(chain_id)
    if base is None:
        raise ConfigurationError(f"Chain {chain_id} is not supported", field="config.chain_id")
    if not overrides:
        return base

    api = dataclasses.replace(
        base.api,
        key=overrides.get("api_key", base.api.key),
        base_uri=overrides.get("api_base_uri") or base.api.base_uri,
    )

    pagination = base.pagination
    if overrides.get("pagination"):
        try:
            pagination = dataclasses.replace(pagination, **overrides["pagination"])
        except TypeError as e:
            raise ConfigurationError(f"Invalid pagination override: {e}", field="config.pagination")

    contracts = dict(base.contracts)
    for name, address in (overrides.get("contracts") or {}).items():
        contract_name = ContractName.lookup(name)
        if contract_name is None:
            raise ConfigurationError(f"{name} not supported", field="config.contracts")
        contracts[contract_name] = dataclasses.replace(contracts[contract_name], address=address)
        logger.info(f"Overriding {contract_name.value} address on chain {chain_id}: {address}")

    return dataclasses.replace(
        base,
        api=api,
        pagination=pagination,
        contracts=MappingProxyType(contracts),
    )


class Settings(BaseSettings):
    """SDK settings read from the environment"""

    model_config = SettingsConfigDict(env_prefix="NFTFI_", env_file=".env", case_sensitive=False, extra="ignore")

    chain_id: int = 1
    api_key: Optional[str] = None
    api_base_uri: Optional[str] = None

    # Blockchain configuration
    rpc_url: Optional[str] = None
    private_key: Optional[str] = Field(None, repr=False)
    account_address: Optional[str] = None

    # Timeouts (seconds)
    request_timeout: float = 30.0
    receipt_timeout: float = 120.0

    def network_config(self) -> NetworkConfig:
        overrides = {}
        if self.api_key:
            overrides["api_key"] = self.api_key
        if self.api_base_uri:
            overrides["api_base_uri"] = self.api_base_uri
        return load_network_config(self.chain_id, overrides)

"""
NFTfi SDK

Originate, repay, liquidate and revoke NFT-collateralized loans across the
NFTfi loan contract versions, and query loans and listings over the REST API.
"""

from .types import (
    ContractName,
    LoanStatus,
    Counterparty,
    ActionResult,
    NftfiError,
    AssertionFailedError,
    ValidationError,
    UnsupportedContractError,
    ConfigurationError,
    ApiError
)

from .models import (
    Nft,
    LoanTerms,
    Lender,
    Offer,
    Loan
)

from .config import (
    ContractConfig,
    CurrencyConfig,
    PaginationConfig,
    ApiConfig,
    NetworkConfig,
    Settings,
    MAINNET,
    GOERLI,
    load_network_config
)

from .utils import (
    parse_amount,
    parse_uint,
    to_decimal_string,
    add_currency_unit,
    ZERO_ADDRESS
)

from .account import Account, Assertion
from .api import ApiClient
from .contract_factory import Web3ContractFactory, Web3ContractHandle
from .error_handler import ErrorHandler
from .adapter_factory import AdapterFactory
from .adapters import (
    BaseLoanAdapter,
    LoanFixedV1Adapter,
    LoanFixedV2Adapter,
    LoanFixedV2_1Adapter,
    LoanFixedV2_3Adapter,
    LoanFixedCollectionV2Adapter,
    LoanFixedCollectionV2_3Adapter
)
from .loans import Loans
from .listings import Listings
from .client import NftfiClient

__all__ = [
    # Types
    "ContractName",
    "LoanStatus",
    "Counterparty",
    "ActionResult",
    "NftfiError",
    "AssertionFailedError",
    "ValidationError",
    "UnsupportedContractError",
    "ConfigurationError",
    "ApiError",

    # Models
    "Nft",
    "LoanTerms",
    "Lender",
    "Offer",
    "Loan",

    # Config
    "ContractConfig",
    "CurrencyConfig",
    "PaginationConfig",
    "ApiConfig",
    "NetworkConfig",
    "Settings",
    "MAINNET",
    "GOERLI",
    "load_network_config",

    # Utils
    "parse_amount",
    "parse_uint",
    "to_decimal_string",
    "add_currency_unit",
    "ZERO_ADDRESS",

    # Collaborators
    "Account",
    "Assertion",
    "ApiClient",
    "Web3ContractFactory",
    "Web3ContractHandle",
    "ErrorHandler",

    # Adapters
    "AdapterFactory",
    "BaseLoanAdapter",
    "LoanFixedV1Adapter",
    "LoanFixedV2Adapter",
    "LoanFixedV2_1Adapter",
    "LoanFixedV2_3Adapter",
    "LoanFixedCollectionV2Adapter",
    "LoanFixedCollectionV2_3Adapter",

    # Services
    "Loans",
    "Listings",
    "NftfiClient"
]

__version__ = "1.0.0"

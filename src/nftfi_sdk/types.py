"""
Core types and enums for NFTfi loan operations.
"""

from enum import Enum
from typing import Optional, Dict, Any, Mapping
from dataclasses import dataclass


class ContractName(str, Enum):
    """Supported loan contract versions"""
    V1_FIXED = "v1.loan.fixed"
    V2_FIXED = "v2.loan.fixed"
    V2_1_FIXED = "v2-1.loan.fixed"
    V2_3_FIXED = "v2-3.loan.fixed"
    V2_FIXED_COLLECTION = "v2.loan.fixed.collection"
    V2_3_FIXED_COLLECTION = "v2-3.loan.fixed.collection"

    @classmethod
    def lookup(cls, name: Any) -> Optional["ContractName"]:
        """Return the member for a version tag, or None if it is not one"""
        try:
            return cls(name)
        except ValueError:
            return None


class LoanStatus(Enum):
    """Loan states reported by the API"""
    ESCROW = "escrow"
    DEFAULTED = "defaulted"
    REPAID = "repaid"
    LIQUIDATED = "liquidated"


class Counterparty(Enum):
    """Role of the account in a loan"""
    LENDER = "lender"
    BORROWER = "borrower"


@dataclass
class ActionResult:
    """Normalized outcome of a state-changing contract call"""
    receipt: Optional[Any] = None
    status: bool = False

    @classmethod
    def from_receipt(cls, receipt: Any) -> "ActionResult":
        return cls(receipt=receipt, status=receipt_status(receipt) == 1)

    @classmethod
    def failed(cls) -> "ActionResult":
        return cls(receipt=None, status=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"receipt": self.receipt, "status": self.status}


def receipt_status(receipt: Any) -> Optional[int]:
    """Read the status code from a mapping or attribute style receipt"""
    if receipt is None:
        return None
    if isinstance(receipt, Mapping):
        return receipt.get("status")
    return getattr(receipt, "status", None)


class NftfiError(Exception):
    """Base exception for SDK operations"""
    def __init__(self, message: str, field: str = "nftfi"):
        self.field = field
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"errors": {self.field: [str(self)]}}


class AssertionFailedError(NftfiError):
    """A required signer or address is not configured"""
    pass


class ValidationError(NftfiError):
    """Caller supplied malformed options"""
    pass


class UnsupportedContractError(ValidationError):
    """No adapter is registered for the contract name"""
    def __init__(self, name: Any):
        super().__init__(f"{name} not supported", field="nftfi.contract.name")


class ConfigurationError(NftfiError):
    """Network table or settings are incomplete"""
    pass


class ApiError(NftfiError):
    """REST API request failed"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, field="api")

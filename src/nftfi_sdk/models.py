"""
Data models for offers and loans.
"""

from typing import Optional, Dict, Any
from dataclasses import dataclass

from .types import ContractName, LoanStatus, ValidationError
from .utils import parse_amount, parse_uint


def require_field(data: Any, path: str) -> Any:
    """Walk a dotted path through nested dicts, raising ValidationError on a gap"""
    current = data
    walked = []
    for key in path.split("."):
        walked.append(key)
        if not isinstance(current, dict) or current.get(key) is None:
            raise ValidationError(f"{'.'.join(walked)} is required", field=".".join(walked))
        current = current[key]
    return current


def optional_field(data: Any, path: str) -> Any:
    current = data
    for key in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


@dataclass(frozen=True)
class Nft:
    """Collateral NFT"""
    address: str
    id: str


@dataclass(frozen=True)
class LoanTerms:
    """Loan terms signed by the lender"""
    currency: str
    principal: int
    repayment: int
    duration: int
    expiry: int


@dataclass(frozen=True)
class Lender:
    address: str
    nonce: str


@dataclass(frozen=True)
class Offer:
    """A lender's signed loan offer"""
    nft: Nft
    terms: LoanTerms
    lender: Lender
    signature: str
    fee_bps: int
    contract_name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Offer":
        """
        Build an offer from the nested option format used by the API.

        Args:
            data: The ``offer`` mapping (``nft``, ``terms.loan``, ``lender``,
                ``signature``, ``nftfi``)

        Raises:
            ValidationError: If a required field is missing or malformed
        """
        wrapped = {"offer": data}
        terms = LoanTerms(
            currency=require_field(wrapped, "offer.terms.loan.currency"),
            principal=parse_amount(
                require_field(wrapped, "offer.terms.loan.principal"), field="offer.terms.loan.principal"
            ),
            repayment=parse_amount(
                require_field(wrapped, "offer.terms.loan.repayment"), field="offer.terms.loan.repayment"
            ),
            duration=parse_uint(require_field(wrapped, "offer.terms.loan.duration"), "offer.terms.loan.duration"),
            expiry=parse_uint(require_field(wrapped, "offer.terms.loan.expiry"), "offer.terms.loan.expiry"),
        )
        return cls(
            nft=Nft(
                address=require_field(wrapped, "offer.nft.address"),
                id=str(require_field(wrapped, "offer.nft.id")),
            ),
            terms=terms,
            lender=Lender(
                address=require_field(wrapped, "offer.lender.address"),
                nonce=str(require_field(wrapped, "offer.lender.nonce")),
            ),
            signature=require_field(wrapped, "offer.signature"),
            fee_bps=parse_uint(require_field(wrapped, "offer.nftfi.fee.bps"), "offer.nftfi.fee.bps"),
            contract_name=str(require_field(wrapped, "offer.nftfi.contract.name")),
        )


@dataclass
class Loan:
    """Loan record, scoped to a contract version"""
    id: int
    borrower: Optional[str] = None
    lender: Optional[str] = None
    status: Optional[LoanStatus] = None
    contract_name: Optional[ContractName] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Loan":
        """Build a loan reference from an API record or a ``{"id": ...}`` option"""
        wrapped = {"loan": data}
        status = optional_field(wrapped, "loan.status")
        try:
            status = LoanStatus(status) if status is not None else None
        except ValueError:
            raise ValidationError(f"{status} is not a loan status", field="loan.status")
        return cls(
            id=parse_uint(require_field(wrapped, "loan.id"), "loan.id"),
            borrower=optional_field(wrapped, "loan.borrower.address"),
            lender=optional_field(wrapped, "loan.lender.address"),
            status=status,
            contract_name=ContractName.lookup(optional_field(wrapped, "loan.nftfi.contract.name")),
        )

"""
JSON ABI fragments for the NFTfi loan contracts.

Only the functions the SDK calls are included.
"""

from typing import Any, Dict, List, Sequence, Tuple

Param = Tuple[str, str]


def _inputs(params: Sequence[Param]) -> List[Dict[str, Any]]:
    return [{"name": name, "type": type_, "internalType": type_} for name, type_ in params]


def _tuple(name: str, params: Sequence[Param]) -> Dict[str, Any]:
    return {"name": name, "type": "tuple", "internalType": "struct", "components": _inputs(params)}


def _function(name: str, inputs: List[Dict[str, Any]], outputs: Sequence[Param] = (),
              mutability: str = "nonpayable") -> Dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": inputs,
        "outputs": _inputs(outputs),
        "stateMutability": mutability,
    }


OFFER_COMPONENTS: List[Param] = [
    ("loanPrincipalAmount", "uint256"),
    ("maximumRepaymentAmount", "uint256"),
    ("nftCollateralId", "uint256"),
    ("nftCollateralContract", "address"),
    ("loanDuration", "uint32"),
    ("loanAdminFeeInBasisPoints", "uint16"),
    ("loanERC20Denomination", "address"),
    ("referrer", "address"),
]

SIGNATURE_COMPONENTS: List[Param] = [
    ("nonce", "uint256"),
    ("expiry", "uint256"),
    ("signer", "address"),
    ("signature", "bytes"),
]

BORROWER_SETTINGS_COMPONENTS: List[Param] = [
    ("revenueSharePartner", "address"),
    ("referralFeeInBasisPoints", "uint16"),
]

_ACCEPT_INPUTS = [
    _tuple("_offer", OFFER_COMPONENTS),
    _tuple("_signature", SIGNATURE_COMPONENTS),
    _tuple("_borrowerSettings", BORROWER_SETTINGS_COMPONENTS),
]

_NONCE_USED = _function(
    "getWhetherNonceHasBeenUsedForUser",
    _inputs([("_user", "address"), ("_nonce", "uint256")]),
    outputs=[("", "bool")],
    mutability="view",
)

LOAN_FIXED_V1_ABI: List[Dict[str, Any]] = [
    _function("cancelLoanCommitmentBeforeLoanHasBegun", _inputs([("nonce", "uint256")])),
    _function("liquidateOverdueLoan", _inputs([("_loanId", "uint256")])),
    _function("payBackLoan", _inputs([("_loanId", "uint256")])),
]

LOAN_FIXED_V2_ABI: List[Dict[str, Any]] = [
    _function("cancelLoanCommitmentBeforeLoanHasBegun", _inputs([("nonce", "uint256")])),
    _function("liquidateOverdueLoan", _inputs([("_loanId", "uint32")])),
    _function("payBackLoan", _inputs([("_loanId", "uint32")])),
    _function("acceptOffer", _ACCEPT_INPUTS),
    _NONCE_USED,
]

LOAN_FIXED_COLLECTION_V2_ABI: List[Dict[str, Any]] = [
    _function("cancelLoanCommitmentBeforeLoanHasBegun", _inputs([("nonce", "uint256")])),
    _function("liquidateOverdueLoan", _inputs([("_loanId", "uint32")])),
    _function("payBackLoan", _inputs([("_loanId", "uint32")])),
    _function("acceptCollectionOffer", _ACCEPT_INPUTS),
    _function("acceptOffer", _ACCEPT_INPUTS),
    _NONCE_USED,
]

LOAN_FIXED_COLLECTION_V2_3_ABI: List[Dict[str, Any]] = [
    _function("cancelLoanCommitmentBeforeLoanHasBegun", _inputs([("_nonce", "uint256")])),
    _function("liquidateOverdueLoan", _inputs([("_loanId", "uint32")])),
    _function("payBackLoan", _inputs([("_loanId", "uint32")])),
    _function("acceptCollectionOffer", _ACCEPT_INPUTS),
    _function("acceptOffer", _ACCEPT_INPUTS, outputs=[("", "uint32")]),
    _NONCE_USED,
]


def find_function(abi: Sequence[Dict[str, Any]], name: str) -> Dict[str, Any]:
    """Return the ABI entry for a function name"""
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == name:
            return entry
    raise ValueError(f"Function {name} not found in ABI")

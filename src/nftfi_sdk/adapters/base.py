"""
Base adapter implementation with common functionality.
"""

import logging
from typing import Any, List, Optional
from abc import ABC

from ..config import ContractConfig
from ..interfaces import IContractFactory, IContractHandle
from ..models import Offer
from ..types import ActionResult, ContractName, receipt_status
from ..utils import ZERO_ADDRESS, to_decimal_string

logger = logging.getLogger(__name__)


class BaseLoanAdapter(ABC):
    """
    Wraps one loan contract version behind four canonical operations.

    Every call fault is caught here: accept/pay back return a failed
    ActionResult and liquidate/cancel return False.
    """

    contract_name: ContractName
    accept_function: Optional[str] = "acceptOffer"

    def __init__(self, config: ContractConfig, contract_factory: IContractFactory):
        self.config = config
        self.contract_factory = contract_factory
        self._contract: Optional[IContractHandle] = None

    @property
    def contract(self) -> IContractHandle:
        """Contract handle, created on first use"""
        if self._contract is None:
            self._contract = self.contract_factory.create(
                address=self.config.address,
                abi=self.config.abi,
            )
        return self._contract

    def build_accept_offer_args(self, offer: Offer) -> List[Any]:
        """Map an offer to the (offer, signature, borrowerSettings) tuple"""
        contract_offer = {
            "loanERC20Denomination": offer.terms.currency,
            "loanPrincipalAmount": to_decimal_string(offer.terms.principal),
            "maximumRepaymentAmount": to_decimal_string(offer.terms.repayment),
            "nftCollateralContract": offer.nft.address,
            "nftCollateralId": offer.nft.id,
            "referrer": ZERO_ADDRESS,
            "loanDuration": offer.terms.duration,
            "loanAdminFeeInBasisPoints": offer.fee_bps,
        }
        signature = {
            "signer": offer.lender.address,
            "nonce": offer.lender.nonce,
            "expiry": offer.terms.expiry,
            "signature": offer.signature,
        }
        borrower_settings = {
            "revenueSharePartner": ZERO_ADDRESS,
            "referralFeeInBasisPoints": 0,
        }
        return [contract_offer, signature, borrower_settings]

    async def accept_offer(self, offer: Offer) -> ActionResult:
        if self.accept_function is None:
            logger.warning(f"{self.contract_name.value} has no offer acceptance entry point")
            return ActionResult.failed()
        try:
            receipt = await self.contract.call(self.accept_function, self.build_accept_offer_args(offer))
            result = ActionResult.from_receipt(receipt)
            self._log_outcome(self.accept_function, result.status, receipt)
            return result
        except Exception as e:
            logger.error(f"Error in {self.accept_function} on {self.contract_name.value}: {e}")
            return ActionResult.failed()

    async def liquidate_overdue_loan(self, loan_id: int) -> bool:
        return await self._send_for_success("liquidateOverdueLoan", [loan_id])

    async def pay_back_loan(self, loan_id: int) -> ActionResult:
        try:
            receipt = await self.contract.call("payBackLoan", [loan_id])
            result = ActionResult.from_receipt(receipt)
            self._log_outcome("payBackLoan", result.status, receipt)
            return result
        except Exception as e:
            logger.error(f"Error in payBackLoan on {self.contract_name.value}: {e}")
            return ActionResult.failed()

    async def cancel_loan_commitment_before_loan_has_begun(self, nonce: str) -> bool:
        return await self._send_for_success("cancelLoanCommitmentBeforeLoanHasBegun", [nonce])

    async def get_whether_nonce_has_been_used_for_user(self, user: str, nonce: str) -> Optional[bool]:
        """Read-only nonce lookup; None if it could not be completed"""
        try:
            return bool(await self.contract.read("getWhetherNonceHasBeenUsedForUser", [user, nonce]))
        except Exception as e:
            logger.error(f"Error reading nonce state on {self.contract_name.value}: {e}")
            return None

    async def _send_for_success(self, function: str, args: List[Any]) -> bool:
        try:
            receipt = await self.contract.call(function, args)
            success = receipt_status(receipt) == 1
            self._log_outcome(function, success, receipt)
            return success
        except Exception as e:
            logger.error(f"Error in {function} on {self.contract_name.value}: {e}")
            return False

    def _log_outcome(self, function: str, success: bool, receipt: Any) -> None:
        if success:
            logger.info(f"{function} succeeded on {self.contract_name.value}")
        else:
            logger.warning(
                f"{function} on {self.contract_name.value} reported status {receipt_status(receipt)}"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address={self.config.address!r})"


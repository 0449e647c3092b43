"""
Loan actions and queries.

State-changing verbs are routed to the adapter for the caller's contract
version; reads go to the REST API.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .account import Account, Assertion
from .adapters import BaseLoanAdapter
from .config import NetworkConfig
from .error_handler import ErrorHandler
from .interfaces import IApiClient
from .models import Loan, Offer, optional_field, require_field
from .types import (
    ActionResult,
    ContractName,
    Counterparty,
    LoanStatus,
    NftfiError,
    UnsupportedContractError,
    ValidationError,
)
from .utils import add_currency_unit, result_records

logger = logging.getLogger(__name__)

Response = Dict[str, Any]


class Loans:
    """Working with loans"""

    def __init__(self, api: IApiClient, account: Account, config: NetworkConfig,
                 adapters: Mapping[ContractName, BaseLoanAdapter],
                 error: Optional[ErrorHandler] = None):
        self.api = api
        self.account = account
        self.config = config
        self.adapters = adapters
        self.assertion = Assertion(account)
        self.error = error or ErrorHandler()

    async def get(self, options: Optional[Dict[str, Any]] = None) -> Union[List[Dict[str, Any]], Response]:
        """
        Get loans in which your account is a participant.

        Args:
            options: ``{"filters": {"counterparty": "lender" | "borrower",
                "status": "escrow" | "defaulted" | "repaid" | "liquidated"}}``

        Returns:
            List of loan records with ``terms.loan.unit`` added, or an error
            response
        """
        try:
            self.assertion.has_address()
            counterparty = optional_field(options, "filters.counterparty")
            status = optional_field(options, "filters.status")
            if counterparty is not None:
                counterparty = self._enum_value(Counterparty, counterparty, "filters.counterparty")
            if status is not None:
                status = self._enum_value(LoanStatus, status, "filters.status")

            response = await self.api.get(
                uri="v0.1/loans",
                params={
                    "accountAddress": self.account.get_address(),
                    "counterparty": counterparty,
                    "status": status,
                },
            )
            return [add_currency_unit(loan, self.config) for loan in result_records(response, "v0.1/loans")]
        except NftfiError as e:
            return self.error.handle(e)

    async def begin(self, options: Dict[str, Any]) -> Response:
        """
        Begin a loan. Called by the borrower when accepting a lender's offer.

        Args:
            options: ``{"offer": {...}}`` with ``nft``, ``terms.loan``,
                ``lender``, ``signature`` and ``nftfi`` (``fee.bps``,
                ``contract.name``)

        Returns:
            ``{"receipt": ..., "status": bool}``, or
            ``{"errors": {"nftfi.contract.name": ["<name> not supported"]}}``
            for an unknown contract version or one without an offer
            acceptance entry point (``v1.loan.fixed``)
        """
        try:
            self.assertion.has_signer()
            name = require_field(options, "offer.nftfi.contract.name")
            adapter = self._adapter(name)
            if adapter is not None and adapter.accept_function is None:
                logger.warning(f"{name} has no offer acceptance entry point")
                adapter = None
            if adapter is None:
                return UnsupportedContractError(name).to_dict()

            offer = Offer.from_dict(options["offer"])
            result = await adapter.accept_offer(offer)
            return result.to_dict()
        except NftfiError as e:
            return self.error.handle(e)

    async def liquidate(self, options: Dict[str, Any]) -> Response:
        """
        Liquidate a defaulted loan once its duration has elapsed.

        Args:
            options: ``{"loan": {"id": ...}, "nftfi": {"contract": {"name": ...}}}``

        Returns:
            ``{"success": bool}``; unknown contract versions yield ``False``
        """
        try:
            self.assertion.has_signer()
            adapter = self._adapter(require_field(options, "nftfi.contract.name"))
            success = False
            if adapter is not None:
                loan = Loan.from_dict(require_field(options, "loan"))
                success = await adapter.liquidate_overdue_loan(loan.id)
            return {"success": success}
        except NftfiError as e:
            return self.error.handle(e)

    async def repay(self, options: Dict[str, Any]) -> Response:
        """
        Repay a loan before it expires.

        Args:
            options: ``{"loan": {"id": ...}, "nftfi": {"contract": {"name": ...}}}``

        Returns:
            ``{"receipt": ..., "status": bool}``; unknown contract versions
            yield a failed result
        """
        try:
            self.assertion.has_signer()
            adapter = self._adapter(require_field(options, "nftfi.contract.name"))
            result = ActionResult.failed()
            if adapter is not None:
                loan = Loan.from_dict(require_field(options, "loan"))
                result = await adapter.pay_back_loan(loan.id)
            return result.to_dict()
        except NftfiError as e:
            return self.error.handle(e)

    async def revoke_offer(self, options: Dict[str, Any]) -> Response:
        """
        Revoke an offer made by your account.

        Args:
            options: ``{"offer": {"nonce": ...}, "nftfi": {"contract": {"name": ...}}}``

        Returns:
            ``{"success": bool}``; unknown contract versions yield ``False``
        """
        try:
            self.assertion.has_signer()
            adapter = self._adapter(require_field(options, "nftfi.contract.name"))
            success = False
            if adapter is not None:
                nonce = str(require_field(options, "offer.nonce"))
                success = await adapter.cancel_loan_commitment_before_loan_has_begun(nonce)
            return {"success": success}
        except NftfiError as e:
            return self.error.handle(e)

    def _adapter(self, name: Any) -> Optional[BaseLoanAdapter]:
        contract_name = ContractName.lookup(name)
        adapter = self.adapters.get(contract_name) if contract_name is not None else None
        if adapter is None:
            logger.warning(f"{name} not supported")
        return adapter

    @staticmethod
    def _enum_value(enum_class, value: Any, field: str) -> str:
        try:
            return enum_class(value).value
        except ValueError:
            raise ValidationError(f"{value} is not a valid {field}", field=field)

"""
Adapters for the individual-offer fixed loan contracts.
"""

import logging
from typing import Optional

from ..types import ContractName
from .base import BaseLoanAdapter

logger = logging.getLogger(__name__)


class LoanFixedV1Adapter(BaseLoanAdapter):
    """
    First generation loan contract.

    It predates signed-offer acceptance, so only repayment, liquidation and
    offer cancellation are available.
    """

    contract_name = ContractName.V1_FIXED
    accept_function = None

    async def get_whether_nonce_has_been_used_for_user(self, user: str, nonce: str) -> Optional[bool]:
        logger.warning(f"{self.contract_name.value} does not expose nonce lookups")
        return None


class LoanFixedV2Adapter(BaseLoanAdapter):
    contract_name = ContractName.V2_FIXED


class LoanFixedV2_1Adapter(BaseLoanAdapter):
    contract_name = ContractName.V2_1_FIXED


class LoanFixedV2_3Adapter(BaseLoanAdapter):
    contract_name = ContractName.V2_3_FIXED

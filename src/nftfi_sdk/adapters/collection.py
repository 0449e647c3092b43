"""
Adapters for the collection-offer fixed loan contracts.

Collection offers are accepted through ``acceptCollectionOffer``; the
external method stays ``accept_offer``.
"""

from ..types import ContractName
from .base import BaseLoanAdapter


class LoanFixedCollectionV2Adapter(BaseLoanAdapter):
    contract_name = ContractName.V2_FIXED_COLLECTION
    accept_function = "acceptCollectionOffer"


class LoanFixedCollectionV2_3Adapter(BaseLoanAdapter):
    contract_name = ContractName.V2_3_FIXED_COLLECTION
    accept_function = "acceptCollectionOffer"

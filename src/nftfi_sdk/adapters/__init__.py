"""
Loan contract adapter implementations.
"""

from .base import BaseLoanAdapter
from .fixed import (
    LoanFixedV1Adapter,
    LoanFixedV2Adapter,
    LoanFixedV2_1Adapter,
    LoanFixedV2_3Adapter,
)
from .collection import LoanFixedCollectionV2Adapter, LoanFixedCollectionV2_3Adapter

__all__ = [
    "BaseLoanAdapter",
    "LoanFixedV1Adapter",
    "LoanFixedV2Adapter",
    "LoanFixedV2_1Adapter",
    "LoanFixedV2_3Adapter",
    "LoanFixedCollectionV2Adapter",
    "LoanFixedCollectionV2_3Adapter",
]

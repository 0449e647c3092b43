"""
Listings query service.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from .config import NetworkConfig
from .error_handler import ErrorHandler
from .interfaces import IApiClient
from .models import optional_field
from .types import NftfiError, ValidationError
from .utils import add_currency_unit, parse_uint, result_records

logger = logging.getLogger(__name__)


class Listings:
    """Working with listings"""

    def __init__(self, api: IApiClient, config: NetworkConfig, error: Optional[ErrorHandler] = None):
        self.api = api
        self.config = config
        self.error = error or ErrorHandler()

    async def get(self, options: Optional[Dict[str, Any]] = None) -> Union[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Get all current listings.

        Args:
            options: Optional ``{"filters": {"nftAddresses": [...]},
                "pagination": {"page": int, "limit": int}}``; pagination falls
                back to the network defaults

        Returns:
            List of listing records with ``terms.loan.unit`` added, or an
            error response
        """
        try:
            limit = parse_uint(
                optional_field(options, "pagination.limit") or self.config.pagination.limit, "pagination.limit"
            )
            page = parse_uint(
                optional_field(options, "pagination.page") or self.config.pagination.page, "pagination.page"
            )
            nft_addresses = optional_field(options, "filters.nftAddresses") or []
            if not isinstance(nft_addresses, (list, tuple)) or not all(isinstance(a, str) for a in nft_addresses):
                raise ValidationError("nftAddresses must be a list of addresses", field="filters.nftAddresses")

            response = await self.api.get(
                uri="v0.1/listings",
                params={
                    "nftAddresses": ",".join(nft_addresses),
                    "page": page,
                    "limit": limit,
                },
            )
            listings = [add_currency_unit(listing, self.config) for listing in result_records(response, "v0.1/listings")]
            logger.debug(f"Fetched {len(listings)} listings (page {page}, limit {limit})")
            return listings
        except NftfiError as e:
            return self.error.handle(e)

"""
Maps SDK exceptions to structured error responses.
"""

import logging
from typing import Any, Dict

from .types import NftfiError

logger = logging.getLogger(__name__)


class ErrorHandler:
    """
    Converts errors raised by public SDK methods into ``{"errors": ...}``.

    With ``raise_errors=True`` the error is re-raised instead, for callers
    that prefer exceptions.
    """

    def __init__(self, raise_errors: bool = False):
        self.raise_errors = raise_errors

    def handle(self, error: NftfiError) -> Dict[str, Any]:
        logger.error(f"{type(error).__name__} on {error.field}: {error}")
        if self.raise_errors:
            raise error
        return error.to_dict()

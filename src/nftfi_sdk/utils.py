"""
Utility functions for loan amounts, addresses and API records.
"""

import copy
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union
from eth_utils import is_address, to_checksum_address

from .types import ApiError, ValidationError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

UINT256_MAX = 2**256 - 1

Amount = Union[int, str, Decimal, float]


def parse_uint(value: Amount, field: str = "amount") -> int:
    """
    Convert a value to an exact unsigned 256-bit integer.

    Accepts ints, decimal or scientific-notation strings, Decimals and floats.
    Floats are converted through their exact binary value, so callers that
    need amounts above 2**53 should pass ints or strings. Values with a
    fractional part are rejected, never truncated.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{value!r} is not a valid number", field=field)
    if isinstance(value, int):
        number = Decimal(value)
    else:
        try:
            number = Decimal(value) if not isinstance(value, str) else Decimal(value.strip())
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError(f"{value!r} is not a valid number", field=field)

    if not number.is_finite():
        raise ValidationError(f"{value!r} is not a valid number", field=field)
    if number < 0:
        raise ValidationError(f"{value!r} is negative", field=field)
    if number > UINT256_MAX:
        raise ValidationError(f"{value!r} exceeds the uint256 range", field=field)
    if number != number.to_integral_value():
        raise ValidationError(f"{value!r} is not a whole number", field=field)
    return int(number)


def parse_amount(value: Amount, field: str = "amount") -> int:
    """Convert a token amount in base units to an exact integer"""
    return parse_uint(value, field)


def to_decimal_string(value: Amount) -> str:
    """Serialize an amount as a full-precision decimal string"""
    return str(parse_amount(value))


def validate_address(address: Any) -> bool:
    """Validate EVM address format"""
    return isinstance(address, str) and is_address(address)


def normalize_address(address: str) -> str:
    """Normalize address to checksum format"""
    return to_checksum_address(address)


def same_address(a: Optional[str], b: Optional[str]) -> bool:
    if not isinstance(a, str) or not isinstance(b, str) or not a or not b:
        return False
    return a.lower() == b.lower()


def result_records(response: Any, uri: str) -> List[Dict[str, Any]]:
    """Extract the ``results`` list from an API body, raising ApiError if it is malformed"""
    results = response.get("results", []) if isinstance(response, dict) else None
    if not isinstance(results, list):
        raise ApiError(f"{uri} returned a malformed body")
    return results


def add_currency_unit(record: Dict[str, Any], network: Any) -> Dict[str, Any]:
    """
    Return a copy of an API record with ``terms.loan.unit`` set.

    The unit comes from ``network.currency_by_address`` for
    ``terms.loan.currency``. Records without a matching currency are returned
    unchanged (as a copy).
    """
    result = copy.deepcopy(record)
    terms = result.get("terms") if isinstance(result, dict) else None
    loan_terms = terms.get("loan") if isinstance(terms, dict) else None
    if not isinstance(loan_terms, dict):
        return result

    currency = network.currency_by_address(loan_terms.get("currency"))
    if currency is not None and currency.unit:
        loan_terms["unit"] = currency.unit
    return result

"""
Shared fixtures for SDK tests
"""

import pytest
from unittest.mock import AsyncMock, Mock

from nftfi_sdk import Account

SIGNER_KEY = "0x" + "1" * 64
LENDER_ADDRESS = "0x" + "2" * 40
NFT_ADDRESS = "0x" + "3" * 40
WETH_ADDRESS = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"


def make_offer_options(contract_name="v2-3.loan.fixed", principal=1000000000000000000,
                       repayment=1100000000000000000):
    """Begin options in the API's nested format"""
    return {
        "offer": {
            "nft": {"id": "42", "address": NFT_ADDRESS},
            "lender": {"address": LENDER_ADDRESS, "nonce": "314159265359"},
            "terms": {
                "loan": {
                    "principal": principal,
                    "repayment": repayment,
                    "duration": 86400 * 7,
                    "currency": WETH_ADDRESS,
                    "expiry": 1690548548,
                }
            },
            "signature": "0x" + "ab" * 65,
            "nftfi": {
                "fee": {"bps": 500},
                "contract": {"name": contract_name},
            },
        }
    }


@pytest.fixture
def signer_account():
    return Account.from_private_key(SIGNER_KEY)


@pytest.fixture
def contract_handle():
    """Contract handle whose calls succeed"""
    handle = Mock()
    handle.call = AsyncMock(return_value={"status": 1, "transactionHash": "0xabc"})
    handle.read = AsyncMock(return_value=False)
    return handle


@pytest.fixture
def contract_factory(contract_handle):
    factory = Mock()
    factory.create.return_value = contract_handle
    return factory


@pytest.fixture
def api():
    client = Mock()
    client.get = AsyncMock(return_value={"results": []})
    return client


@pytest.fixture
def offer_options():
    return make_offer_options()

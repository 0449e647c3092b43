"""
web3.py backed contract factory.

Handles are cheap to create; all network I/O happens in ``call`` and ``read``.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence
from eth_utils import to_bytes
from web3 import AsyncWeb3

from .abis import find_function
from .account import Account
from .types import AssertionFailedError
from .utils import normalize_address

logger = logging.getLogger(__name__)


def coerce_value(abi_type: Dict[str, Any], value: Any) -> Any:
    """Convert a canonical argument to the Python type web3 expects for an ABI input"""
    type_ = abi_type["type"]

    if type_.endswith("]"):
        inner = dict(abi_type, type=type_[:type_.rindex("[")])
        return [coerce_value(inner, item) for item in value]

    if type_ == "tuple":
        components = abi_type["components"]
        if isinstance(value, Mapping):
            return tuple(coerce_value(component, value[component["name"]]) for component in components)
        return tuple(coerce_value(component, item) for component, item in zip(components, value))

    if type_.startswith(("uint", "int")):
        if isinstance(value, str):
            return int(value, 0) if value.lower().startswith("0x") else int(value)
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"{value} is not a whole number for {type_}")
        return int(value)

    if type_ == "address":
        return normalize_address(value)

    if type_.startswith("bytes") and isinstance(value, str):
        return to_bytes(hexstr=value)

    return value


def coerce_args(function_abi: Dict[str, Any], args: Sequence[Any]) -> List[Any]:
    inputs = function_abi.get("inputs", [])
    if len(inputs) != len(args):
        raise ValueError(
            f"{function_abi.get('name')} expects {len(inputs)} arguments, got {len(args)}"
        )
    return [coerce_value(abi_input, arg) for abi_input, arg in zip(inputs, args)]


class Web3ContractHandle:
    """Handle for one deployed contract"""

    def __init__(self, w3: AsyncWeb3, account: Account, address: str,
                 abi: Sequence[Dict[str, Any]], receipt_timeout: float = 120.0):
        self.w3 = w3
        self.account = account
        self.address = normalize_address(address)
        self.abi = list(abi)
        self.receipt_timeout = receipt_timeout
        self._contract = w3.eth.contract(address=self.address, abi=self.abi)

    def _function(self, function: str, args: Sequence[Any]):
        function_abi = find_function(self.abi, function)
        return self._contract.functions[function](*coerce_args(function_abi, args))

    async def call(self, function: str, args: Sequence[Any]) -> Any:
        """Build, sign and send a transaction, then wait for its receipt"""
        sender = self.account.get_address()
        if not self.account.has_signer() or sender is None:
            raise AssertionFailedError("A signer is required to send transactions", field="account.signer")

        contract_function = self._function(function, args)
        nonce = await self.w3.eth.get_transaction_count(sender)
        tx = await contract_function.build_transaction({
            "from": sender,
            "nonce": nonce,
        })

        if self.account.signer is not None:
            signed_tx = self.account.signer.sign_transaction(tx)
            tx_hash = await self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        else:
            # Unlocked account, the node signs
            tx_hash = await self.w3.eth.send_transaction(tx)

        logger.info(f"Sent {function} to {self.address}: {tx_hash.hex()}")
        return await self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)

    async def read(self, function: str, args: Sequence[Any]) -> Any:
        """Call a view function"""
        return await self._function(function, args).call()


class Web3ContractFactory:
    """Creates Web3ContractHandle instances sharing one provider"""

    def __init__(self, account: Account, rpc_url: Optional[str] = None,
                 w3: Optional[AsyncWeb3] = None, receipt_timeout: float = 120.0):
        if w3 is None:
            if not rpc_url:
                raise ValueError("Either rpc_url or w3 is required")
            w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self.w3 = w3
        self.account = account
        self.receipt_timeout = receipt_timeout

    def create(self, address: str, abi: Sequence[Dict[str, Any]]) -> Web3ContractHandle:
        return Web3ContractHandle(
            self.w3,
            self.account,
            address,
            abi,
            receipt_timeout=self.receipt_timeout,
        )

    async def disconnect(self) -> None:
        provider = self.w3.provider
        if hasattr(provider, "disconnect"):
            await provider.disconnect()

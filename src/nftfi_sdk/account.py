"""
Account and signer handling.
"""

from typing import Optional
from eth_account import Account as EthAccount
from eth_account.signers.local import LocalAccount

from .interfaces import IAccount
from .types import AssertionFailedError, ValidationError
from .utils import validate_address, normalize_address


class Account:
    """
    The wallet the SDK acts for.

    Either a local signer, or an address. An address marked ``unlocked`` is
    signed for by the RPC node.
    """

    def __init__(self, address: Optional[str] = None, signer: Optional[LocalAccount] = None,
                 unlocked: bool = False):
        if address is not None and not validate_address(address):
            raise ValidationError(f"{address} is not a valid address", field="account.address")
        if signer is not None and address is not None and signer.address.lower() != address.lower():
            raise ValidationError("Signer does not match account address", field="account.address")
        self._signer = signer
        self._unlocked = unlocked and address is not None
        self._address = normalize_address(address) if address else None

    @classmethod
    def from_private_key(cls, private_key: str) -> "Account":
        return cls(signer=EthAccount.from_key(private_key))

    @property
    def signer(self) -> Optional[LocalAccount]:
        return self._signer

    @property
    def unlocked(self) -> bool:
        return self._unlocked

    def has_signer(self) -> bool:
        return self._signer is not None or self._unlocked

    def has_address(self) -> bool:
        return self.get_address() is not None

    def get_address(self) -> Optional[str]:
        if self._signer is not None:
            return self._signer.address
        return self._address


class Assertion:
    """Precondition checks run before any external call"""

    def __init__(self, account: IAccount):
        self.account = account

    def has_signer(self) -> None:
        if not self.account.has_signer():
            raise AssertionFailedError("A signer is required for this action", field="account.signer")

    def has_address(self) -> None:
        if not self.account.has_address():
            raise AssertionFailedError("An account address is required for this action", field="account.address")

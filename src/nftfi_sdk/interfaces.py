"""
Interfaces (protocols) for the collaborators the loan layer consumes.
Using Python's Protocol for structural subtyping.
"""

from typing import Protocol, Dict, Any, Optional, List, Sequence
from abc import abstractmethod


class IContractHandle(Protocol):
    """Handle bound to one deployed contract"""

    @abstractmethod
    async def call(self, function: str, args: Sequence[Any]) -> Any:
        """Send a state-changing transaction and return its receipt"""
        ...

    @abstractmethod
    async def read(self, function: str, args: Sequence[Any]) -> Any:
        """Call a view function"""
        ...


class IContractFactory(Protocol):
    """Creates contract handles from an address and ABI"""

    @abstractmethod
    def create(self, address: str, abi: Sequence[Dict[str, Any]]) -> IContractHandle:
        """Create a handle; must not perform I/O"""
        ...


class IAccount(Protocol):
    """Account/signer abstraction"""

    @abstractmethod
    def has_signer(self) -> bool:
        ...

    @abstractmethod
    def has_address(self) -> bool:
        ...

    @abstractmethod
    def get_address(self) -> Optional[str]:
        ...


class IApiClient(Protocol):
    """REST backend client"""

    @abstractmethod
    async def get(self, uri: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, List[Dict[str, Any]]]:
        """GET a resource and return the decoded body"""
        ...

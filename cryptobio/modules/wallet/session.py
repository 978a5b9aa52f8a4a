"""
Wallet session contract shared by the page-level flows

A session is owned by the wallet provider: the application reads its
address and active chain and asks it to switch chains, read balances,
submit transactions and wait for receipts. It never mutates the
connection itself.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class WalletError(Exception):
    """Raised by wallet implementations when a provider call fails"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ChainSwitchError(WalletError):
    pass


class WalletSession(ABC):
    address: Optional[str] = None
    chain_id: Optional[int] = None

    @property
    def is_connected(self) -> bool:
        return self.address is not None

    @abstractmethod
    async def switch_chain(self, chain_id: int) -> None:
        ...

    @abstractmethod
    async def get_token_balance(self, token_address: str, owner: str) -> int:
        ...

    @abstractmethod
    async def send_transaction(self, to: str, data: str) -> str:
        """Submit a call to the wallet for signing; returns the transaction hash"""

    @abstractmethod
    async def wait_for_receipt(self, tx_hash: str) -> Dict[str, Any]:
        ...

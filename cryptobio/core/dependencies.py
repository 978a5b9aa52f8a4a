"""
Core dependencies for wallet-scoped routes
"""

from fastapi import Header, HTTPException, status
from typing import Optional
import logging

from cryptobio.core.validators import is_valid_address, normalize_address

logger = logging.getLogger(__name__)

WALLET_HEADER = "X-Wallet-Address"


def get_optional_wallet(
    x_wallet_address: Optional[str] = Header(default=None, alias=WALLET_HEADER)
) -> Optional[str]:
    """Connected wallet address (lowercase) from the session header, or None when disconnected"""
    if not x_wallet_address:
        return None
    address = x_wallet_address.strip()
    if not is_valid_address(address):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid wallet address"
        )
    return normalize_address(address)


def get_connected_wallet(
    x_wallet_address: Optional[str] = Header(default=None, alias=WALLET_HEADER)
) -> str:
    """Require a connected wallet; routes using this render the connect prompt otherwise"""
    wallet = get_optional_wallet(x_wallet_address)
    if wallet is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Connect your wallet to continue"
        )
    return wallet

"""
USDC amount conversion and call encoding

All arithmetic on token amounts happens on integer smallest units; human
amounts are parsed as Decimal and never pass through float.
"""

from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import Optional, Union

from web3 import Web3

from cryptobio.config import settings
from cryptobio.config.chain_config import USDC_ABI

Amount = Union[int, str, Decimal]


def parse_amount(raw) -> Optional[Decimal]:
    """Parse a human amount; None unless it is a finite positive number"""
    if raw is None or isinstance(raw, (bool, float)):
        return None
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


def to_smallest_unit(amount: Amount, decimals: Optional[int] = None) -> int:
    """Convert a human amount (e.g. 9.9) into integer base units (9900000 for 6 decimals)"""
    decimals = settings.usdc_decimals if decimals is None else decimals
    value = Decimal(str(amount)) * (Decimal(10) ** decimals)
    return int(value.to_integral_value(rounding=ROUND_DOWN))


def from_smallest_unit(units: int, decimals: Optional[int] = None) -> Decimal:
    decimals = settings.usdc_decimals if decimals is None else decimals
    return Decimal(units) / (Decimal(10) ** decimals)


def format_usd(units: int, decimals: Optional[int] = None) -> str:
    """Two-decimal display of a base-unit amount, rounded down"""
    value = from_smallest_unit(units, decimals)
    return str(value.quantize(Decimal("0.01"), rounding=ROUND_DOWN))


def get_token_contract(w3: Optional[Web3] = None, token_address: Optional[str] = None):
    w3 = w3 or Web3()
    return w3.eth.contract(
        address=Web3.to_checksum_address(token_address or settings.usdc_address),
        abi=USDC_ABI,
    )


def encode_transfer(to: str, amount_units: int, token_address: Optional[str] = None) -> str:
    """ABI-encode transfer(to, amount) call data"""
    contract = get_token_contract(token_address=token_address)
    return contract.encode_abi("transfer", args=[Web3.to_checksum_address(to), amount_units])


def truncate_address(address: str) -> str:
    return f"{address[:6]}...{address[-4:]}"

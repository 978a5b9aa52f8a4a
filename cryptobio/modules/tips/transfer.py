"""
Fee split and transfer construction for a single tip

Only the creator's share is transferred. The platform fee is withheld from
the amount but never sent anywhere by this path.
"""

from typing import List, Optional

from cryptobio.config import settings
from cryptobio.config.chain_config import get_tip_label
from cryptobio.modules.profiles.schemas import ProfileResponse
from cryptobio.modules.tips.schemas import TipOption, TipSplit, TipTransfer
from cryptobio.modules.wallet.token import encode_transfer, format_usd, to_smallest_unit

AMOUNT_TOO_SMALL_MESSAGE = "Amount is too small to send"


def split_tip(total_units: int, fee_percent: Optional[int] = None) -> TipSplit:
    """creator = floor(total * (100 - fee) / 100), all in base units"""
    fee_percent = settings.platform_fee_percent if fee_percent is None else fee_percent
    creator_units = (total_units * (100 - fee_percent)) // 100
    return TipSplit(
        total_units=total_units,
        creator_units=creator_units,
        fee_units=total_units - creator_units,
    )


def is_sendable(amount, fee_percent: Optional[int] = None) -> bool:
    """False when the creator's share rounds down to zero base units"""
    return split_tip(to_smallest_unit(amount), fee_percent).creator_units > 0


def build_transfer(profile: ProfileResponse, amount, fee_percent: Optional[int] = None) -> TipTransfer:
    split = split_tip(to_smallest_unit(amount), fee_percent)
    if split.creator_units <= 0:
        raise ValueError(AMOUNT_TOO_SMALL_MESSAGE)
    recipient = profile.payout_target
    return TipTransfer(
        chain_id=settings.chain_id,
        token_address=settings.usdc_address,
        recipient=recipient,
        amount=str(amount),
        total_units=split.total_units,
        creator_units=split.creator_units,
        fee_units=split.fee_units,
        data=encode_transfer(recipient, split.creator_units),
    )


def build_tip_options(tip_amounts: List[int], fee_percent: Optional[int] = None) -> List[TipOption]:
    options = []
    for index, amount in enumerate(tip_amounts):
        label = get_tip_label(index)
        split = split_tip(to_smallest_unit(amount), fee_percent)
        options.append(TipOption(
            index=index,
            label=label["label"],
            emoji=label["emoji"],
            amount=amount,
            creator_amount=format_usd(split.creator_units),
        ))
    return options


def format_fee_note(display_name: str, fee_percent: Optional[int] = None) -> str:
    fee_percent = settings.platform_fee_percent if fee_percent is None else fee_percent
    first_name = display_name.split(" ")[0] if display_name else "The creator"
    return f"USDC on {settings.chain_name} • {first_name} receives {100 - fee_percent}%"

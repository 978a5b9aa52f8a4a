"""
Public tipping page state machine

idle -> sending -> success, or idle -> switching -> sending -> success, with
error reachable whenever a step fails. success and error return to idle only
through reset(); a new tip may also be started straight from error.

The only guard against overlapping sends is can_send: while a chain switch,
wallet signature or receipt wait is outstanding, tip() does nothing.
"""

import asyncio
import logging
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union

from cryptobio.config import settings
from cryptobio.modules.profiles.schemas import ProfileResponse
from cryptobio.modules.profiles.service import ProfileService
from cryptobio.modules.tips.errors import (
    NOT_CONNECTED_MESSAGE, describe_wallet_error, switch_chain_message,
)
from cryptobio.modules.tips.schemas import TipOption, TipTransfer
from cryptobio.modules.tips.transfer import (
    AMOUNT_TOO_SMALL_MESSAGE, build_tip_options, build_transfer, format_fee_note, is_sendable,
)
from cryptobio.modules.wallet.session import WalletSession
from cryptobio.modules.wallet.token import format_usd, parse_amount, to_smallest_unit

logger = logging.getLogger(__name__)


class TipStatus(str, Enum):
    IDLE = "idle"
    SWITCHING = "switching"
    SENDING = "sending"
    SUCCESS = "success"
    ERROR = "error"


class PendingSignal(str, Enum):
    """Outstanding async work, in display priority order"""
    SWITCHING = "switching"
    AWAITING_SIGNATURE = "awaiting_signature"
    CONFIRMING = "confirming"


VALID_TRANSITIONS = {
    TipStatus.IDLE: [TipStatus.SWITCHING, TipStatus.SENDING, TipStatus.ERROR],
    TipStatus.SWITCHING: [TipStatus.SENDING, TipStatus.ERROR],
    TipStatus.SENDING: [TipStatus.SUCCESS, TipStatus.ERROR],
    TipStatus.SUCCESS: [TipStatus.IDLE],
    TipStatus.ERROR: [TipStatus.IDLE, TipStatus.SWITCHING, TipStatus.SENDING, TipStatus.ERROR],
}


def validate_transition(current: TipStatus, new: TipStatus) -> None:
    if new not in VALID_TRANSITIONS[current]:
        raise ValueError(f"Invalid transition: {current.value} -> {new.value}")


class TipFlow:
    def __init__(
        self,
        service: ProfileService,
        wallet: WalletSession,
        username: str,
        chain_id: Optional[int] = None,
        fee_percent: Optional[int] = None,
        switch_delay: Optional[float] = None,
    ):
        self.service = service
        self.wallet = wallet
        self.username = username.lower()
        self.chain_id = settings.chain_id if chain_id is None else chain_id
        self.fee_percent = settings.platform_fee_percent if fee_percent is None else fee_percent
        self.switch_delay = settings.chain_switch_delay_seconds if switch_delay is None else switch_delay

        self.profile: Optional[ProfileResponse] = None
        self.loaded = False
        self.status = TipStatus.IDLE
        self.error_message = ""
        self.selected_amount: Optional[Union[int, Decimal]] = None
        self.custom_amount = ""
        self.show_custom = False
        self.balance: Optional[int] = None
        self.tx_hash: Optional[str] = None
        self.last_transfer: Optional[TipTransfer] = None
        self.submission_pending = False
        self.confirmation_pending = False

    @property
    def not_found(self) -> bool:
        return self.loaded and self.profile is None

    @property
    def pending(self) -> Optional[PendingSignal]:
        if self.status == TipStatus.SWITCHING:
            return PendingSignal.SWITCHING
        if self.submission_pending:
            return PendingSignal.AWAITING_SIGNATURE
        if self.confirmation_pending:
            return PendingSignal.CONFIRMING
        return None

    @property
    def is_processing(self) -> bool:
        return self.pending is not None

    @property
    def can_send(self) -> bool:
        return (
            self.profile is not None
            and not self.is_processing
            and self.status != TipStatus.SUCCESS
        )

    @property
    def custom_amount_valid(self) -> bool:
        return parse_amount(self.custom_amount) is not None

    @property
    def wrong_network(self) -> bool:
        return self.wallet.is_connected and self.wallet.chain_id != self.chain_id

    @property
    def balance_display(self) -> str:
        return format_usd(self.balance) if self.balance is not None else "..."

    @property
    def tip_options(self) -> List[TipOption]:
        if self.profile is None:
            return []
        return build_tip_options(self.profile.tip_amounts, self.fee_percent)

    @property
    def fee_note(self) -> str:
        if self.profile is None:
            return ""
        return format_fee_note(self.profile.display_name, self.fee_percent)

    async def load(self) -> Optional[ProfileResponse]:
        self.profile = self.service.get_profile_by_username(self.username)
        self.loaded = True
        if self.profile is None:
            logger.info(f"Tip page for {self.username}: profile not found")
            return None
        await self.refresh_balance()
        return self.profile

    async def refresh_balance(self) -> Optional[int]:
        """Read the visitor's token balance; failures leave it unknown"""
        if not self.wallet.is_connected or self.wallet.chain_id is None:
            self.balance = None
            return None
        try:
            self.balance = await self.wallet.get_token_balance(settings.usdc_address, self.wallet.address)
        except Exception as e:
            logger.warning(f"Could not read USDC balance for {self.wallet.address}: {e}")
            self.balance = None
        return self.balance

    def open_custom(self) -> None:
        if not self.is_processing:
            self.show_custom = True

    def set_custom_amount(self, value: str) -> None:
        self.custom_amount = value

    async def tip_custom(self) -> TipStatus:
        amount = parse_amount(self.custom_amount)
        if amount is None:
            return self.status
        return await self.tip(amount)

    async def tip(self, amount: Union[int, Decimal]) -> TipStatus:
        if not self.can_send:
            logger.warning(f"Ignoring tip of {amount} for {self.username} in state {self.status.value}")
            return self.status

        if not is_sendable(amount, self.fee_percent):
            self._fail(AMOUNT_TOO_SMALL_MESSAGE)
            return self.status

        if not self.wallet.is_connected:
            self._fail(NOT_CONNECTED_MESSAGE)
            return self.status

        if self.wallet.chain_id != self.chain_id:
            self._transition(TipStatus.SWITCHING)
            try:
                await self.wallet.switch_chain(self.chain_id)
                await asyncio.sleep(self.switch_delay)
            except Exception as e:
                logger.warning(f"Chain switch to {self.chain_id} failed: {e}")
                self._fail(switch_chain_message(settings.chain_name))
                return self.status

        total_units = to_smallest_unit(amount)
        if self.balance is not None and self.balance < total_units:
            self._fail(f"Insufficient USDC. You have ${format_usd(self.balance)} but need ${amount}.")
            return self.status

        self._transition(TipStatus.SENDING)
        self.selected_amount = amount
        self.error_message = ""

        try:
            self.last_transfer = build_transfer(self.profile, amount, self.fee_percent)
        except Exception as e:
            self._fail(str(e) or "Failed to send transaction")
            return self.status

        self.submission_pending = True
        try:
            self.tx_hash = await self.wallet.send_transaction(
                self.last_transfer.token_address, self.last_transfer.data
            )
        except Exception as e:
            self._fail(describe_wallet_error(e))
            return self.status
        finally:
            self.submission_pending = False

        logger.info(f"Tip {self.tx_hash} submitted: {self.last_transfer.creator_units} units to {self.last_transfer.recipient}")
        self.confirmation_pending = True
        try:
            await self.wallet.wait_for_receipt(self.tx_hash)
        except Exception as e:
            self._fail(describe_wallet_error(e))
            return self.status
        finally:
            self.confirmation_pending = False

        self._transition(TipStatus.SUCCESS)
        self.selected_amount = None
        self.custom_amount = ""
        self.show_custom = False
        await self.refresh_balance()
        return self.status

    def reset(self) -> None:
        """Dismiss success or error and detach from the previous transaction"""
        if self.status != TipStatus.IDLE:
            self._transition(TipStatus.IDLE)
        self.selected_amount = None
        self.error_message = ""
        self.tx_hash = None
        self.last_transfer = None

    def _transition(self, new: TipStatus) -> None:
        validate_transition(self.status, new)
        logger.info(f"Tip flow {self.username}: {self.status.value} -> {new.value}")
        self.status = new

    def _fail(self, message: str) -> None:
        self.error_message = message
        self._transition(TipStatus.ERROR)

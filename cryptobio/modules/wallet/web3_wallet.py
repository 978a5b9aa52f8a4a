import logging
from typing import Any, Dict, Optional

from web3 import AsyncWeb3, AsyncHTTPProvider, Web3

from cryptobio.config import settings
from cryptobio.config.chain_config import USDC_ABI
from cryptobio.modules.wallet.session import ChainSwitchError, WalletError, WalletSession

logger = logging.getLogger(__name__)


class Web3WalletSession(WalletSession):
    """Wallet session backed by an EIP-1193 style JSON-RPC endpoint.

    The endpoint is expected to manage the account keys itself (a browser
    wallet bridge or a node with unlocked accounts), so transactions are
    sent with eth_sendTransaction and signed on the other side.
    """

    def __init__(self, rpc_url: Optional[str] = None, w3: Optional[AsyncWeb3] = None):
        self.rpc_url = rpc_url or settings.rpc_url
        self.w3 = w3 or AsyncWeb3(AsyncHTTPProvider(self.rpc_url, request_kwargs={"timeout": 10}))
        self.address = None
        self.chain_id = None

    async def connect(self) -> Optional[str]:
        """Read the wallet's selected account and active chain"""
        accounts = await self.w3.eth.accounts
        self.address = accounts[0].lower() if accounts else None
        self.chain_id = await self.w3.eth.chain_id
        logger.info(f"Wallet session on chain {self.chain_id}: {self.address or 'no account'}")
        return self.address

    async def switch_chain(self, chain_id: int) -> None:
        response = await self.w3.provider.make_request(
            "wallet_switchEthereumChain", [{"chainId": hex(chain_id)}]
        )
        if response.get("error"):
            error = response["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ChainSwitchError(message or "Chain switch rejected")
        self.chain_id = await self.w3.eth.chain_id
        if self.chain_id != chain_id:
            raise ChainSwitchError(f"Wallet is still on chain {self.chain_id}")

    async def get_token_balance(self, token_address: str, owner: str) -> int:
        contract = self.w3.eth.contract(address=Web3.to_checksum_address(token_address), abi=USDC_ABI)
        return await contract.functions.balanceOf(Web3.to_checksum_address(owner)).call()

    async def send_transaction(self, to: str, data: str) -> str:
        if not self.address:
            raise WalletError("Wallet not connected")
        tx_hash = await self.w3.eth.send_transaction({
            "from": Web3.to_checksum_address(self.address),
            "to": Web3.to_checksum_address(to),
            "data": data,
        })
        return Web3.to_hex(tx_hash)

    async def wait_for_receipt(self, tx_hash: str) -> Dict[str, Any]:
        receipt = await self.w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=settings.receipt_timeout_seconds
        )
        if receipt.get("status") != 1:
            raise WalletError(f"Transaction {tx_hash} reverted")
        return dict(receipt)

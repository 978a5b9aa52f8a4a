from cryptobio.modules.wallet.session import WalletError

INSUFFICIENT_BALANCE_MESSAGE = "Insufficient USDC balance. Please add USDC to your wallet."
CANCELLED_MESSAGE = "Transaction cancelled"
NOT_CONNECTED_MESSAGE = "Please connect your wallet first"
MAX_ERROR_LENGTH = 100

_BALANCE_PHRASES = ("exceeds balance", "exceeds allowance")
_REJECTION_PHRASES = ("user rejected", "user denied")


def describe_wallet_error(exc: Exception) -> str:
    """Map a wallet or RPC failure to the message shown in the error banner"""
    if isinstance(exc, WalletError):
        message = exc.message
    else:
        message = str(exc)
    message = message or "Transaction failed"
    lowered = message.lower()
    if any(phrase in lowered for phrase in _BALANCE_PHRASES):
        return INSUFFICIENT_BALANCE_MESSAGE
    if any(phrase in lowered for phrase in _REJECTION_PHRASES):
        return CANCELLED_MESSAGE
    return message[:MAX_ERROR_LENGTH]


def switch_chain_message(chain_name: str) -> str:
    return f"Please switch to {chain_name} network in your wallet"

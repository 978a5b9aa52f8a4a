from cryptobio.modules.wallet.session import ChainSwitchError, WalletError, WalletSession
from cryptobio.modules.wallet.web3_wallet import Web3WalletSession

__all__ = ["WalletSession", "WalletError", "ChainSwitchError", "Web3WalletSession"]

"""
Token and tip presentation configuration
Defines the USDC contract interface consumed by the tipping flow and the
labels shown next to each preset tip amount.
"""

# Only transfer, balanceOf and decimals are exercised; allowance and approve
# are declared so the ABI matches the deployed token surface we rely on.
USDC_ABI = [
    {
        "name": "transfer",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "balanceOf",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "allowance",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "approve",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "decimals",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
]

TOKEN_SYMBOL = "USDC"

DEFAULT_TIP_AMOUNTS = [5, 10, 25]

# Labels are positional: first preset is Coffee, second Lunch, third Big Tip
TIP_LABELS = [
    {"label": "Coffee", "emoji": "☕"},
    {"label": "Lunch", "emoji": "\U0001F355"},
    {"label": "Big Tip", "emoji": "\U0001F680"},
]


def get_tip_label(index: int) -> dict:
    """Return the label for the preset at position index (last label repeats)."""
    if index < len(TIP_LABELS):
        return TIP_LABELS[index]
    return TIP_LABELS[-1]

"""Known chains served by the page API.

The engine accepts any positive chain id; this registry only supplies
display names and strict parsing for the CLI.
"""

from __future__ import annotations

CHAIN_NAMES: dict[int, str] = {
    1: "Ethereum",
    11155111: "Sepolia",
    10: "Optimism",
    11155420: "Optimism Sepolia",
    8453: "Base",
    84532: "Base Sepolia",
    137: "Polygon",
    80002: "Polygon Amoy",
    42161: "Arbitrum",
    421614: "Arbitrum Sepolia",
    34443: "Mode",
    59144: "Linea",
    42170: "Arbitrum Nova",
    42220: "Celo",
    43114: "Avalanche",
    43113: "Avalanche Fuji",
    100: "Gnosis",
    56: "BSC",
    10143: "Monad Testnet",
    143: "Monad",
    6342: "MegaETH Testnet",
}


def is_valid_chain_id(value: int) -> bool:
    return value in CHAIN_NAMES


def get_chain_name(chain_id: int) -> str:
    return CHAIN_NAMES.get(chain_id, f"Chain {chain_id}")


def parse_chain_id(value: str) -> int:
    """Parse a known chain id from text; raise ValueError otherwise."""
    try:
        parsed = int(value, 10)
    except (TypeError, ValueError):
        raise ValueError(f'Invalid chain ID: "{value}" is not a number') from None
    if not is_valid_chain_id(parsed):
        valid = ", ".join(str(c) for c in CHAIN_NAMES)
        raise ValueError(f"Unknown chain ID: {parsed}\nValid chain IDs: {valid}")
    return parsed

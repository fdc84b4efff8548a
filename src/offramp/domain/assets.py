"""Chains and tokens the banking partner accepts on its liquidation addresses.

The partner names chains and currencies with its own lowercase identifiers
("optimism", "usdc"); these helpers translate between them and EVM chain ids
and token contract addresses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from offramp.domain.model.primitives import NATIVE_TOKEN_ADDRESSES

if TYPE_CHECKING:
    from offramp.domain.model.primitives import ChainId, TokenAddress

OPTIMISM_CHAIN_ID: Final[str] = "10"
USDC_OPTIMISM: Final[str] = "0x0b2C639c533813f4Aa9D7837CAf62653d097Ff85"

# ordered: used as the preference order when listing cross-chain options
PARTNER_CHAINS: Final[dict[str, str]] = {
    "1": "ethereum",
    "10": "optimism",
    "137": "polygon",
    "8453": "base",
    "42161": "arbitrum",
}

PARTNER_TOKENS: Final[dict[str, dict[str, str]]] = {
    "1": {
        "usdc": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        "usdt": "0xdAC17F958D2ee523a2206206994597C13D831ec7",
    },
    "10": {"usdc": USDC_OPTIMISM},
    "137": {"usdc": "0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359"},
    "8453": {"usdc": "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"},
    "42161": {"usdc": "0xaf88d065e77c8cC2239327C5EDb3A432268e5831"},
}

TESTNET_CHAINS: Final[frozenset[str]] = frozenset(
    {
        "5",  # goerli
        "420",  # optimism goerli
        "80001",  # mumbai
        "84531",  # base goerli
        "84532",  # base sepolia
        "421614",  # arbitrum sepolia
        "11155111",  # sepolia
        "11155420",  # optimism sepolia
    }
)


def partner_chain_name(chain_id: ChainId) -> str | None:
    return PARTNER_CHAINS.get(str(chain_id))


def partner_token_name(chain_id: ChainId, token_address: TokenAddress) -> str | None:
    tokens = PARTNER_TOKENS.get(str(chain_id), {})
    wanted = token_address.lower()
    for name, address in tokens.items():
        if address.lower() == wanted:
            return name
    return None


def chain_id_for_partner_chain(name: str) -> ChainId | None:
    wanted = name.lower()
    for chain_id, chain_name in PARTNER_CHAINS.items():
        if chain_name == wanted:
            return chain_id
    return None


def token_address_for_partner_token(chain_id: ChainId, name: str) -> TokenAddress | None:
    return PARTNER_TOKENS.get(str(chain_id), {}).get(name.lower())


def is_native_token(token_address: TokenAddress) -> bool:
    return token_address.lower() in NATIVE_TOKEN_ADDRESSES


def is_testnet_chain(chain_id: ChainId) -> bool:
    return str(chain_id) in TESTNET_CHAINS

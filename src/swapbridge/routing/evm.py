"""ERC-20 approval calldata and related EVM helpers."""

from typing import Optional

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from swapbridge.tokens import is_native_token

APPROVE_SELECTOR = function_signature_to_4byte_selector("approve(address,uint256)")

MAX_UINT256 = 2**256 - 1


def needs_approval(token_address: str) -> bool:
    """Native currency is sent as value and never needs an allowance."""
    return not is_native_token(token_address)


def encode_approve(spender: str, amount: Optional[int] = None) -> str:
    """Encode ERC20.approve(spender, amount). Defaults to an unlimited allowance.

    Returns:
        0x-prefixed calldata hex
    """
    value = MAX_UINT256 if amount is None else amount
    encoded = encode(["address", "uint256"], [to_checksum_address(spender), value])
    return "0x" + (APPROVE_SELECTOR + encoded).hex()

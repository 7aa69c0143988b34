"""Selector derivation for EVM function signatures."""

from typing import Iterable

from eth_utils import keccak

SELECTOR_PREFIX = "0x"
SELECTOR_BYTES = 4
SELECTOR_LENGTH = len(SELECTOR_PREFIX) + SELECTOR_BYTES * 2


def derive_selector(signature: str) -> str:
    """Return the lowercase ``0x``-prefixed 4-byte selector of ``signature``."""

    digest = keccak(text=signature)
    return SELECTOR_PREFIX + digest[:SELECTOR_BYTES].hex()


def build_signature(name: str, input_types: Iterable[str]) -> str:
    return f"{name}({','.join(input_types)})"

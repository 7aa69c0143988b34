"""Split raw EVM calldata into a selector and typed parameter strings."""

import logging
from typing import Tuple

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import to_checksum_address

from signature_registry.registry import SelectorIndex
from signature_registry.selectors import SELECTOR_LENGTH, SELECTOR_PREFIX

from .errors import DecodeFailureError, MalformedInputError
from .models import DecodedCall

logger = logging.getLogger(__name__)


class CalldataDecoder:
    def __init__(self, index: SelectorIndex) -> None:
        self._index = index

    def decode(self, calldata: str) -> DecodedCall:
        if not isinstance(calldata, str) or not calldata.startswith(SELECTOR_PREFIX):
            raise MalformedInputError("Calldata must be a 0x-prefixed hex string.")
        if len(calldata) < SELECTOR_LENGTH:
            raise MalformedInputError("Calldata is shorter than a function selector.")

        body = calldata[len(SELECTOR_PREFIX):]
        if len(body) % 2:
            raise MalformedInputError("Calldata must contain whole bytes.")
        try:
            raw = bytes.fromhex(body)
        except ValueError as exc:
            raise MalformedInputError("Calldata is not valid hex.") from exc

        selector = calldata[:SELECTOR_LENGTH].lower()
        entry = self._index.get(selector)
        if entry is None:
            logger.debug("Selector %s has no registry entry", selector)
            return DecodedCall(selector=selector, resolved=False)

        args_data = raw[(SELECTOR_LENGTH - len(SELECTOR_PREFIX)) // 2:]
        try:
            values = decode(list(entry.parameter_types), args_data)
        except DecodingError as exc:
            logger.warning("Decoding %s failed: %s", entry.canonical_signature, exc)
            raise DecodeFailureError(f"{entry.canonical_signature}: {exc}") from exc

        parameters: Tuple[Tuple[str, str], ...] = tuple(
            (parameter.name, _render(parameter.abi_type, value))
            for parameter, value in zip(entry.parameters, values)
        )
        return DecodedCall(
            selector=selector,
            parameters=parameters,
            resolved=True,
            function_name=entry.name,
            signature=entry.canonical_signature,
            category=entry.category,
        )


def stringify_value(value: object) -> str:
    """Render a decoded ABI value without numeric types."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return ",".join(stringify_value(item) for item in value)
    return str(value)


def _render(abi_type: str, value: object) -> str:
    if abi_type.startswith("address"):
        if isinstance(value, (list, tuple)):
            value = tuple(to_checksum_address(item) for item in value)
        else:
            value = to_checksum_address(value)
    return stringify_value(value)

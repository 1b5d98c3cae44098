"""Byte and hex helpers shared across the package."""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any

from eth_typing import HexStr
from hexbytes import HexBytes
from web3 import Web3

from .exceptions import ValidationError


def to_bytes(value: bytes | bytearray | str | None, *, field: str = "value") -> bytes:
    """Coerce a hex string or bytes-like value to ``bytes``."""
    if value is None:
        return b""

    if isinstance(value, bytes | bytearray):
        return bytes(value)

    if isinstance(value, str):
        try:
            return Web3.to_bytes(hexstr=HexStr(value))
        except ValueError as exc:
            raise ValidationError(
                "Value is not valid hex", field=field, value=value, details={"error": str(exc)}
            ) from exc

    raise ValidationError(f"Unsupported type for byte coercion: {type(value)!r}", field=field)


def to_hex(value: bytes | bytearray | str) -> str:
    """Return a lowercase ``0x``-prefixed hex string."""
    if isinstance(value, str):
        value = to_bytes(value)
    return HexBytes(value).to_0x_hex().lower()


def same_address(left: str | bytes | None, right: str | bytes | None) -> bool:
    if left is None or right is None:
        return False
    return _address_text(left) == _address_text(right)


def _address_text(value: str | bytes) -> str:
    if isinstance(value, bytes | bytearray):
        return to_hex(value)
    return str(value).lower()


async def resolve_properties(request: Mapping[str, Any]) -> dict[str, Any]:
    """Await every awaitable value of ``request`` and return a plain dict."""
    resolved: dict[str, Any] = {}
    for key, value in request.items():
        if inspect.isawaitable(value):
            value = await value
        resolved[key] = value
    return resolved

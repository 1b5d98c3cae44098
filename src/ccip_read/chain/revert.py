"""Strategies for pulling revert payloads out of failed calls."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from ..exceptions import ValidationError
from ..utils import to_bytes

RevertExtractor = Callable[[BaseException], "bytes | None"]

# Keys under which JSON-RPC nodes and client libraries nest revert data
_NESTED_KEYS = ("data", "error", "originalError")
_MAX_DEPTH = 4


def extract_revert_data(exc: BaseException) -> bytes | None:
    """Return the revert payload carried by ``exc`` or None if there is none.

    Understands web3.py's ``ContractLogicError`` family (``exc.data``),
    JSON-RPC error objects passed as exception arguments, and the nested
    ``error.data.originalError.data`` shape some node middlewares produce.
    """
    payload = _find_revert_hex(getattr(exc, "data", None))
    if payload is not None:
        return payload

    for arg in exc.args:
        payload = _find_revert_hex(arg)
        if payload is not None:
            return payload

    return None


def _find_revert_hex(value: Any, depth: int = 0) -> bytes | None:
    if depth > _MAX_DEPTH or value is None:
        return None

    if isinstance(value, bytes | bytearray):
        return bytes(value)

    if isinstance(value, str):
        if not value.startswith("0x"):
            return None
        try:
            return to_bytes(value)
        except ValidationError:
            return None

    if isinstance(value, Mapping):
        for key in _NESTED_KEYS:
            found = _find_revert_hex(value.get(key), depth + 1)
            if found is not None:
                return found

    return None

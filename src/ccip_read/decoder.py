"""Recognise and decode ``OffchainLookup`` revert payloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError

from .constants import OFFCHAIN_LOOKUP_SELECTOR, OFFCHAIN_LOOKUP_TYPES, SELECTOR_SIZE, WORD_SIZE
from .exceptions import NestedScopeViolationError
from .types import Address, RedirectSignal
from .utils import same_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Redirect:
    signal: RedirectSignal


@dataclass(frozen=True)
class Result:
    data: bytes


@dataclass(frozen=True)
class Malformed:
    data: bytes
    reason: str


DecodeOutcome = Redirect | Result | Malformed


def is_offchain_lookup(data: bytes) -> bool:
    """Return True when ``data`` is a selector followed by whole ABI words."""
    return (
        len(data) % WORD_SIZE == SELECTOR_SIZE
        and data[:SELECTOR_SIZE] == OFFCHAIN_LOOKUP_SELECTOR
    )


def decode_response(data: bytes) -> DecodeOutcome:
    """Classify raw call output as a redirect, a plain result or a broken redirect."""
    if not is_offchain_lookup(data):
        return Result(data)

    try:
        sender, urls, call_data, callback_function, extra_data = abi_decode(
            OFFCHAIN_LOOKUP_TYPES, data[SELECTOR_SIZE:]
        )
    except (DecodingError, ValueError, OverflowError) as exc:
        logger.debug("OffchainLookup payload failed to decode: %s", exc)
        return Malformed(data, str(exc))

    signal = RedirectSignal(
        sender=sender,
        urls=tuple(urls),
        call_data=bytes(call_data),
        callback_function=bytes(callback_function),
        extra_data=bytes(extra_data),
    )
    return Redirect(signal)


def ensure_same_scope(signal: RedirectSignal, target: Address | None) -> None:
    """Reject lookups raised by a contract other than the one we called.

    A lookup bubbling up from a nested call cannot be answered safely: the
    gateway response would be delivered to the outer contract, which has no
    way to prove which contract the answer belongs to.
    """
    if same_address(signal.sender, target):
        return

    raise NestedScopeViolationError(
        "OffchainLookup thrown in nested scope",
        to=target,
        sender=signal.sender,
        details={"to": target, **signal.as_details()},
    )

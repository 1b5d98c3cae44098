"""Capability interfaces consumed by the resolution loop and adapters."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from .types import Network


class ChainClient(Protocol):
    """Anything able to perform JSON-RPC style operations against a chain.

    ``perform("call", {"transaction": ..., "block_identifier": ...})`` must
    return the raw call output or raise when the call reverts.
    """

    async def perform(self, method: str, params: Any) -> Any: ...

    async def detect_network(self) -> Network: ...


class Signer(Protocol):
    """Transaction and message signer sitting on top of a chain client."""

    async def get_address(self) -> str: ...

    async def sign_message(self, message: str | bytes) -> str: ...

    async def send_transaction(self, transaction: Mapping[str, Any]) -> Any: ...


@runtime_checkable
class SignerCapable(Protocol):
    """Chain clients that can hand out signers."""

    def get_signer(self, address_or_index: str | int | None = None) -> Signer: ...

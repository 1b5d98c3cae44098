"""Type definitions and data models for offchain lookup resolution."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from web3.types import BlockIdentifier

from .utils import to_bytes, to_hex

Address = str  # Ethereum address, any casing


@dataclass(frozen=True)
class RedirectSignal:
    """Decoded ``OffchainLookup`` revert."""

    sender: Address
    urls: tuple[str, ...]
    call_data: bytes
    callback_function: bytes
    extra_data: bytes

    def as_details(self) -> dict[str, Any]:
        return {
            "sender": self.sender,
            "urls": list(self.urls),
            "call_data": to_hex(self.call_data),
            "callback_function": to_hex(self.callback_function),
            "extra_data": to_hex(self.extra_data),
        }


@dataclass(frozen=True)
class CallContext:
    """A read call against ``target``; replaced rather than mutated on each hop."""

    target: Address | None
    call_data: bytes
    block_identifier: BlockIdentifier | None = None
    fields: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_transaction(
        cls, transaction: Mapping[str, Any], block_identifier: BlockIdentifier | None = None
    ) -> CallContext:
        """Split a web3 transaction dict into target, call data and the remaining fields."""

        fields = {k: v for k, v in transaction.items() if k not in ("to", "data")}
        return cls(
            target=transaction.get("to"),
            call_data=to_bytes(transaction.get("data"), field="data"),
            block_identifier=block_identifier,
            fields=fields,
        )

    def with_call_data(self, call_data: bytes) -> CallContext:
        return replace(self, call_data=call_data)

    def to_transaction(self) -> dict[str, Any]:
        transaction = dict(self.fields)
        if self.target is not None:
            transaction["to"] = self.target
        transaction["data"] = to_hex(self.call_data)
        return transaction

    def to_call_params(self) -> dict[str, Any]:
        """Parameters for the chain client's ``call`` operation."""

        return {"transaction": self.to_transaction(), "block_identifier": self.block_identifier}


@dataclass(frozen=True)
class GatewayRequest:
    """Logical payload sent to a gateway."""

    sender: Address
    data: bytes

    def as_args(self) -> dict[str, str]:
        return {"sender": to_hex(self.sender), "data": to_hex(self.data)}


@dataclass(frozen=True)
class GatewayResponse:
    """Status code and parsed JSON body returned by a gateway."""

    status_code: int
    body: Mapping[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> Any:
        return self.body.get("message")

    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299

    def is_client_error(self) -> bool:
        return 400 <= self.status_code <= 499


@dataclass(frozen=True)
class ResolutionResult:
    """Terminal output of a resolution: the final call and its result bytes."""

    context: CallContext
    result: bytes

    @property
    def final_call_data(self) -> bytes:
        return self.context.call_data


@dataclass(frozen=True)
class Network:
    chain_id: int
    name: str | None = None

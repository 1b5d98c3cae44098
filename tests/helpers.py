from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any
from urllib.parse import urlparse

from eth_abi import encode as abi_encode

from ccip_read.constants import OFFCHAIN_LOOKUP_SELECTOR, OFFCHAIN_LOOKUP_TYPES
from ccip_read.exceptions import GatewayUnavailableError
from ccip_read.types import GatewayResponse, Network

TARGET = "0x000000000000000000000000000000000000c0de"
OTHER_CONTRACT = "0x000000000000000000000000000000000000beef"
ACCOUNT = "0x000000000000000000000000000000000000dead"

CALLBACK = bytes.fromhex("abcd1234")
RESULT_WORD = (1000).to_bytes(32, "big")
DEFAULT_URLS = ("http://gw/{sender}/{data}.json",)


def encode_lookup(
    sender: str = TARGET,
    urls: Sequence[str] = DEFAULT_URLS,
    call_data: bytes = b"\xde\xad",
    callback: bytes = CALLBACK,
    extra_data: bytes = b"\xbe\xef",
) -> bytes:
    return OFFCHAIN_LOOKUP_SELECTOR + abi_encode(
        OFFCHAIN_LOOKUP_TYPES, [sender, list(urls), call_data, callback, extra_data]
    )


def with_oversized_url_length(payload: bytes) -> bytes:
    """Rewrite the first URL's length word to a value no index can hold."""
    args = bytearray(payload[4:])
    urls_offset = int.from_bytes(args[32:64], "big")
    elements = urls_offset + 32
    first_url = elements + int.from_bytes(args[elements : elements + 32], "big")
    args[first_url : first_url + 32] = (2**255).to_bytes(32, "big")
    return payload[:4] + bytes(args)


Handler = Callable[[dict[str, Any]], Any]


class DummyChainClient:
    """Chain client whose ``call`` answers come from ``handler``."""

    def __init__(self, handler: Handler, chain_id: int = 1337) -> None:
        self._handler = handler
        self._chain_id = chain_id
        self.calls: list[dict[str, Any]] = []
        self.forwarded: list[tuple[str, Any]] = []

    async def perform(self, method: str, params: Any) -> Any:
        if method == "call":
            self.calls.append(params)
            return self._handler(params)
        self.forwarded.append((method, params))
        return f"{method}-result"

    async def detect_network(self) -> Network:
        return Network(chain_id=self._chain_id)


class DummySigner:
    def __init__(self, address: str = ACCOUNT) -> None:
        self.address = address
        self.sent: list[dict[str, Any]] = []
        self.messages: list[str | bytes] = []

    async def get_address(self) -> str:
        return self.address

    async def sign_message(self, message: str | bytes) -> str:
        self.messages.append(message)
        return "0xsigned"

    async def send_transaction(self, transaction: dict[str, Any]) -> str:
        self.sent.append(transaction)
        return "0xhash"


class SignerChainClient(DummyChainClient):
    def __init__(self, handler: Handler, signer: DummySigner) -> None:
        super().__init__(handler)
        self.signer = signer
        self.signer_requests: list[str | int | None] = []

    def get_signer(self, address_or_index: str | int | None = None) -> DummySigner:
        self.signer_requests.append(address_or_index)
        return self.signer


class DummyFetcher:
    """Fetcher answering per host; hosts missing from ``failures`` return ``data``."""

    def __init__(
        self,
        data: str = "0x1111",
        failures: dict[str, GatewayResponse | Exception] | None = None,
    ) -> None:
        self._data = data
        self._failures = failures or {}
        self.requests: list[tuple[str, str | None]] = []

    async def fetch(self, url: str, body: str | None = None) -> GatewayResponse:
        self.requests.append((url, body))
        failure = self._failures.get(urlparse(url).netloc)
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return failure
        return GatewayResponse(status_code=200, body={"data": self._data})


def unreachable(host: str) -> GatewayUnavailableError:
    return GatewayUnavailableError(f"Failed to reach gateway {host}", endpoint=host)


def lookup_contract(
    *,
    sender: str = TARGET,
    urls: Sequence[str] = DEFAULT_URLS,
    result: bytes = RESULT_WORD,
) -> Handler:
    """A contract that asks for offchain data and answers once its callback is called."""

    def handler(params: dict[str, Any]) -> str:
        data = params["transaction"]["data"]
        if data.startswith("0x" + CALLBACK.hex()):
            return "0x" + result.hex()
        return "0x" + encode_lookup(sender=sender, urls=urls).hex()

    return handler

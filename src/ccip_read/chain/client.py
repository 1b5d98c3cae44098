"""web3.py backed chain client and account signer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.types import RPCEndpoint

from ..config import DEFAULT_REQUEST_TIMEOUT
from ..exceptions import NotSupportedError, RPCError, ValidationError
from ..types import Network

logger = logging.getLogger(__name__)


class Web3ChainClient:
    """Expose an ``AsyncWeb3`` instance through the ``perform`` interface.

    ``call`` is executed with web3's built-in offchain lookup handling turned
    off so that reverts reach the resolution loop untouched. Any other method
    is sent to the node as a raw JSON-RPC request.
    """

    def __init__(self, web3: AsyncWeb3, account: LocalAccount | None = None) -> None:
        self._web3 = web3
        self._account = account
        if account is not None:
            self._apply_account_middleware(web3, account)

    @classmethod
    def from_url(
        cls,
        rpc_url: str,
        *,
        account: LocalAccount | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> Web3ChainClient:
        provider = AsyncHTTPProvider(rpc_url, request_kwargs={"timeout": request_timeout})
        return cls(AsyncWeb3(provider), account=account)

    @property
    def web3(self) -> AsyncWeb3:
        return self._web3

    async def perform(self, method: str, params: Any) -> Any:
        if method == "call":
            return await self._web3.eth.call(
                _checksum_addresses(params["transaction"]),
                params.get("block_identifier"),
                ccip_read_enabled=False,
            )

        if params is None:
            rpc_params: list[Any] = []
        elif isinstance(params, list | tuple):
            rpc_params = list(params)
        else:
            rpc_params = [params]
        response = await self._web3.provider.make_request(RPCEndpoint(method), rpc_params)
        if "error" in response:
            raise RPCError(
                f"RPC request {method} failed",
                method=method,
                error=response["error"],
                details={"params": rpc_params},
            )
        return response.get("result")

    async def detect_network(self) -> Network:
        chain_id = await self._web3.eth.chain_id
        return Network(chain_id=chain_id)

    def get_signer(self, address_or_index: str | int | None = None) -> AccountSigner:
        if self._account is None:
            raise NotSupportedError(
                "Web3ChainClient has no account attached", operation="get_signer"
            )

        if isinstance(address_or_index, int) and address_or_index != 0:
            raise ValidationError(
                "Only the attached account is available",
                field="address_or_index",
                value=address_or_index,
            )
        if isinstance(address_or_index, str) and (
            address_or_index.lower() != self._account.address.lower()
        ):
            raise ValidationError(
                "Requested signer does not match the attached account",
                field="address_or_index",
                value=address_or_index,
            )

        return AccountSigner(self._web3, self._account)

    def _apply_account_middleware(self, web3: AsyncWeb3, account: LocalAccount) -> None:
        web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(account))  # type: ignore[arg-type]
        web3.eth.default_account = account.address


class AccountSigner:
    """Sign with a local ``eth_account`` key and send through web3."""

    def __init__(self, web3: AsyncWeb3, account: LocalAccount) -> None:
        self._web3 = web3
        self._account = account

    async def get_address(self) -> str:
        return self._account.address

    async def sign_message(self, message: str | bytes) -> str:
        if isinstance(message, str):
            signable = encode_defunct(text=message)
        else:
            signable = encode_defunct(primitive=message)
        signed = self._account.sign_message(signable)
        return signed.signature.to_0x_hex()

    async def send_transaction(self, transaction: Mapping[str, Any]) -> Any:
        tx = _checksum_addresses(transaction)
        tx.setdefault("from", self._account.address)

        tx_hash = await self._web3.eth.send_transaction(tx)
        logger.info("Transaction sent hash=%s", tx_hash.to_0x_hex())
        return tx_hash


def _checksum_addresses(transaction: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``transaction`` with checksummed ``to`` and ``from``."""
    tx = dict(transaction)
    for key in ("to", "from"):
        if isinstance(tx.get(key), str):
            tx[key] = Web3.to_checksum_address(tx[key])
    return tx

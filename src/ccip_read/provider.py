"""Chain client wrapper that transparently resolves offchain lookups."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from web3.types import BlockIdentifier

from .base import ChainClient, SignerCapable
from .chain.revert import RevertExtractor, extract_revert_data
from .config import ResolverConfig
from .exceptions import NotSupportedError
from .gateway import Fetcher, RequestsFetcher
from .resolver import resolve_call
from .signer import CCIPReadSigner, _create_signer
from .types import CallContext, Network, ResolutionResult

logger = logging.getLogger(__name__)


class CCIPReadProvider:
    """Wrap a chain client so ``call`` operations follow EIP-3668 lookups.

    Example::

        client = Web3ChainClient(AsyncWeb3(AsyncHTTPProvider(rpc_url)))
        provider = CCIPReadProvider(client)
        result = await provider.call({"to": resolver, "data": call_data})

    Every operation other than ``call`` is forwarded to the wrapped client
    unchanged.
    """

    def __init__(
        self,
        client: ChainClient,
        fetcher: Fetcher | None = None,
        *,
        config: ResolverConfig | None = None,
        revert_extractor: RevertExtractor = extract_revert_data,
    ) -> None:
        self._config = config or ResolverConfig()
        self.parent = client
        self.fetcher: Fetcher = fetcher or RequestsFetcher(
            request_timeout=self._config.request_timeout
        )
        self._revert_extractor = revert_extractor

    @property
    def config(self) -> ResolverConfig:
        return self._config

    async def perform(self, method: str, params: Any) -> Any:
        if method == "call":
            context = CallContext.from_transaction(
                params["transaction"], params.get("block_identifier")
            )
            resolution = await self.resolve(context)
            return resolution.result
        logger.debug("Forwarding %s to wrapped client", method)
        return await self.parent.perform(method, params)

    async def resolve(self, context: CallContext) -> ResolutionResult:
        """Run ``context`` through the resolution loop and keep the final call."""

        return await resolve_call(
            self.parent,
            context,
            self.fetcher,
            max_hops=self._config.max_hops,
            revert_extractor=self._revert_extractor,
        )

    async def call(
        self,
        transaction: Mapping[str, Any],
        block_identifier: BlockIdentifier | None = "latest",
    ) -> bytes:
        return await self.perform(
            "call", {"transaction": transaction, "block_identifier": block_identifier}
        )

    async def detect_network(self) -> Network:
        return await self.parent.detect_network()

    def get_signer(self, address_or_index: str | int | None = None) -> CCIPReadSigner:
        if not isinstance(self.parent, SignerCapable):
            raise NotSupportedError(
                "CCIPReadProvider only supports get_signer if the wrapped client does",
                operation="get_signer",
                details={"parent": repr(self.parent)},
            )

        return _create_signer(self.parent.get_signer(address_or_index), self)

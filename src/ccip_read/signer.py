"""Signer wrapper that resolves offchain lookups before sending transactions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .base import Signer
from .constants import GAS_LIMIT_FIELD
from .exceptions import NotSupportedError
from .types import CallContext
from .utils import resolve_properties, to_hex

if TYPE_CHECKING:
    from .provider import CCIPReadProvider

logger = logging.getLogger(__name__)


class CCIPReadSigner:
    """Signer bound to a ``CCIPReadProvider``.

    Instances are obtained from ``CCIPReadProvider.get_signer``. Before a
    transaction is sent its call data is run through the provider's
    resolution loop, so a transaction hitting an ``OffchainLookup`` is
    submitted with the final callback call data instead.
    """

    def __init__(self, parent: Signer, provider: CCIPReadProvider) -> None:
        self.parent = parent
        self.provider = provider

    async def get_address(self) -> str:
        return await self.parent.get_address()

    async def sign_message(self, message: str | bytes) -> str:
        return await self.parent.sign_message(message)

    async def sign_transaction(self, transaction: Mapping[str, Any]) -> str:
        raise NotSupportedError(
            "CCIPReadSigner does not support sign_transaction", operation="sign_transaction"
        )

    def connect(self, provider: Any) -> CCIPReadSigner:
        raise NotSupportedError("CCIPReadSigner does not support connect", operation="connect")

    async def send_transaction(self, request: Mapping[str, Any]) -> Any:
        transaction = await resolve_properties(request)
        if "from" not in transaction:
            transaction["from"] = await self.parent.get_address()

        # The gas limit belongs to the final transaction, not the preflight call
        has_gas_limit = GAS_LIMIT_FIELD in transaction
        gas_limit = transaction.pop(GAS_LIMIT_FIELD, None)

        context = CallContext.from_transaction(
            transaction, self.provider.config.preflight_block
        )
        resolution = await self.provider.resolve(context)
        resolved = resolution.context.to_transaction()

        if has_gas_limit:
            resolved[GAS_LIMIT_FIELD] = gas_limit

        logger.info(
            "Sending transaction to %s selector=%s",
            resolved.get("to"),
            to_hex(resolution.final_call_data[:4]),
        )
        return await self.parent.send_transaction(resolved)


def _create_signer(parent: Signer, provider: CCIPReadProvider) -> CCIPReadSigner:
    return CCIPReadSigner(parent, provider)

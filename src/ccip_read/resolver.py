"""The call resolution loop.

A call is sent to the chain client. If the result (or revert payload) is an
``OffchainLookup``, the named gateways are queried and the contract's
callback is invoked with the gateway response. This repeats until a plain
result comes back or ``max_hops`` calls have been made.
"""

from __future__ import annotations

import logging

from eth_abi import encode as abi_encode

from .base import ChainClient
from .chain.revert import RevertExtractor, extract_revert_data
from .config import DEFAULT_MAX_HOPS
from .constants import CALLBACK_ARGUMENT_TYPES
from .decoder import Malformed, Redirect, decode_response, ensure_same_scope
from .exceptions import MalformedRedirectError, TooManyRedirectsError, UnknownError
from .gateway import Fetcher, fetch_offchain_data
from .types import CallContext, RedirectSignal, ResolutionResult
from .utils import to_bytes, to_hex

logger = logging.getLogger(__name__)


def encode_callback(signal: RedirectSignal, response: bytes) -> bytes:
    """Build ``callbackFunction(response, extraData)`` call data."""
    return signal.callback_function + abi_encode(
        CALLBACK_ARGUMENT_TYPES, [response, signal.extra_data]
    )


async def perform_call(
    client: ChainClient,
    context: CallContext,
    revert_extractor: RevertExtractor = extract_revert_data,
) -> bytes:
    """Run one chain call, returning its output or the revert payload."""
    try:
        result = await client.perform("call", context.to_call_params())
    except Exception as exc:
        payload = revert_extractor(exc)
        if payload is None:
            raise UnknownError(
                "The error message does not contain revert data",
                details={"to": context.target, "error": str(exc)},
            ) from exc
        return payload

    return to_bytes(result, field="result")


async def resolve_call(
    client: ChainClient,
    context: CallContext,
    fetcher: Fetcher,
    *,
    max_hops: int = DEFAULT_MAX_HOPS,
    revert_extractor: RevertExtractor = extract_revert_data,
) -> ResolutionResult:
    """Resolve ``context`` through up to ``max_hops`` offchain lookups."""
    for hop in range(max_hops):
        logger.debug("Call hop %d to %s", hop, context.target)
        data = await perform_call(client, context, revert_extractor)

        outcome = decode_response(data)
        if isinstance(outcome, Malformed):
            raise MalformedRedirectError(
                "OffchainLookup payload could not be decoded",
                data=outcome.data,
                details={"to": context.target, "reason": outcome.reason},
            )
        if not isinstance(outcome, Redirect):
            return ResolutionResult(context=context, result=outcome.data)

        signal = outcome.signal
        ensure_same_scope(signal, context.target)
        logger.debug(
            "OffchainLookup from %s: urls=%s callback=%s",
            signal.sender,
            list(signal.urls),
            to_hex(signal.callback_function),
        )

        response = await fetch_offchain_data(fetcher, signal.urls, signal.sender, signal.call_data)
        context = context.with_call_data(encode_callback(signal, response))

    raise TooManyRedirectsError(
        "Too many redirects",
        target=context.target,
        max_hops=max_hops,
        details={"to": context.target},
    )

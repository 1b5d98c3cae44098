"""ccip-read - EIP-3668 offchain lookup resolution for web3 calls.

Wrap a chain client in ``CCIPReadProvider`` and contract calls that revert
with ``OffchainLookup`` are answered from the named gateways and retried
through the contract's callback, transparently to the caller.
"""

from .base import ChainClient, Signer, SignerCapable
from .chain import AccountSigner, Web3ChainClient, extract_revert_data
from .config import DEFAULT_MAX_HOPS, DEFAULT_REQUEST_TIMEOUT, ResolverConfig
from .decoder import Malformed, Redirect, Result, decode_response, ensure_same_scope
from .exceptions import (
    AllGatewaysFailedError,
    CCIPReadError,
    GatewayUnavailableError,
    MalformedRedirectError,
    NestedScopeViolationError,
    NotSupportedError,
    RPCError,
    TooManyRedirectsError,
    UnknownError,
    ValidationError,
)
from .gateway import Fetcher, RequestsFetcher, fetch_offchain_data, render_url
from .provider import CCIPReadProvider
from .resolver import encode_callback, resolve_call
from .signer import CCIPReadSigner
from .types import (
    CallContext,
    GatewayRequest,
    GatewayResponse,
    Network,
    RedirectSignal,
    ResolutionResult,
)

__version__ = "0.1.0"

__all__ = [
    # Adapters
    "CCIPReadProvider",
    "CCIPReadSigner",
    "Web3ChainClient",
    "AccountSigner",
    # Interfaces
    "ChainClient",
    "Signer",
    "SignerCapable",
    "Fetcher",
    "RequestsFetcher",
    # Configuration
    "ResolverConfig",
    "DEFAULT_MAX_HOPS",
    "DEFAULT_REQUEST_TIMEOUT",
    # Types
    "CallContext",
    "GatewayRequest",
    "GatewayResponse",
    "Network",
    "RedirectSignal",
    "ResolutionResult",
    "Redirect",
    "Result",
    "Malformed",
    # Exceptions
    "CCIPReadError",
    "UnknownError",
    "NestedScopeViolationError",
    "MalformedRedirectError",
    "AllGatewaysFailedError",
    "TooManyRedirectsError",
    "NotSupportedError",
    "GatewayUnavailableError",
    "RPCError",
    "ValidationError",
    # Functions
    "decode_response",
    "ensure_same_scope",
    "encode_callback",
    "fetch_offchain_data",
    "render_url",
    "resolve_call",
    "extract_revert_data",
]

"""Chain client implementations and revert payload extraction."""

from .client import AccountSigner, Web3ChainClient
from .revert import RevertExtractor, extract_revert_data

__all__ = [
    "AccountSigner",
    "RevertExtractor",
    "Web3ChainClient",
    "extract_revert_data",
]

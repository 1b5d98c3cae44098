from __future__ import annotations

import asyncio

import pytest
from helpers import (
    RESULT_WORD,
    TARGET,
    DummyChainClient,
    DummyFetcher,
    DummySigner,
    SignerChainClient,
    encode_lookup,
    lookup_contract,
)

from ccip_read.config import ResolverConfig
from ccip_read.exceptions import NotSupportedError, TooManyRedirectsError
from ccip_read.gateway import RequestsFetcher
from ccip_read.provider import CCIPReadProvider
from ccip_read.signer import CCIPReadSigner
from ccip_read.types import Network


def test_passes_network_detection_through():
    provider = CCIPReadProvider(DummyChainClient(lambda params: "0x", chain_id=31337))
    assert asyncio.run(provider.detect_network()) == Network(chain_id=31337)


def test_forwards_non_call_methods_unchanged():
    client = DummyChainClient(lambda params: "0x")
    provider = CCIPReadProvider(client, DummyFetcher())

    result = asyncio.run(provider.perform("eth_blockNumber", []))

    assert result == "eth_blockNumber-result"
    assert client.forwarded == [("eth_blockNumber", [])]
    assert client.calls == []


def test_call_resolves_lookup_and_returns_bytes_only():
    client = DummyChainClient(lookup_contract())
    provider = CCIPReadProvider(client, DummyFetcher())

    result = asyncio.run(provider.call({"to": TARGET, "data": "0x70a08231"}))

    assert result == RESULT_WORD
    assert len(client.calls) == 2
    assert client.calls[0]["block_identifier"] == "latest"


def test_perform_call_keeps_block_identifier():
    client = DummyChainClient(lambda params: "0x" + RESULT_WORD.hex())
    provider = CCIPReadProvider(client, DummyFetcher())

    params = {"transaction": {"to": TARGET, "data": "0x"}, "block_identifier": 17}
    assert asyncio.run(provider.perform("call", params)) == RESULT_WORD
    assert client.calls[0]["block_identifier"] == 17


def test_max_hops_comes_from_config():
    client = DummyChainClient(lambda params: "0x" + encode_lookup().hex())
    provider = CCIPReadProvider(client, DummyFetcher(), config=ResolverConfig(max_hops=2))

    with pytest.raises(TooManyRedirectsError):
        asyncio.run(provider.call({"to": TARGET, "data": "0x"}))

    assert len(client.calls) == 2


def test_default_fetcher_uses_config_timeout():
    provider = CCIPReadProvider(
        DummyChainClient(lambda params: "0x"), config=ResolverConfig(request_timeout=2.5)
    )

    assert isinstance(provider.fetcher, RequestsFetcher)
    assert provider.fetcher._request_timeout == 2.5


def test_get_signer_requires_signer_capable_client():
    provider = CCIPReadProvider(DummyChainClient(lambda params: "0x"), DummyFetcher())

    with pytest.raises(NotSupportedError) as excinfo:
        provider.get_signer()

    assert excinfo.value.operation == "get_signer"


def test_get_signer_wraps_parent_signer():
    parent = DummySigner()
    client = SignerChainClient(lambda params: "0x", parent)
    provider = CCIPReadProvider(client, DummyFetcher())

    signer = provider.get_signer(0)

    assert isinstance(signer, CCIPReadSigner)
    assert signer.parent is parent
    assert signer.provider is provider
    assert client.signer_requests == [0]

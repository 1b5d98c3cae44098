"""Configuration for offchain lookup resolution."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from web3.types import BlockIdentifier

from .exceptions import ValidationError

DEFAULT_MAX_HOPS = 4
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_PREFLIGHT_BLOCK = "latest"

MAX_HOPS_ENV = "CCIP_READ_MAX_HOPS"
REQUEST_TIMEOUT_ENV = "CCIP_READ_REQUEST_TIMEOUT"


@dataclass(frozen=True)
class ResolverConfig:
    """Settings shared by the provider and signer adapters."""

    max_hops: int = DEFAULT_MAX_HOPS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    preflight_block: BlockIdentifier = DEFAULT_PREFLIGHT_BLOCK

    def __post_init__(self) -> None:
        if self.max_hops < 1:
            raise ValidationError(
                "max_hops must be at least 1", field="max_hops", value=self.max_hops
            )
        if self.request_timeout <= 0:
            raise ValidationError(
                "request_timeout must be positive",
                field="request_timeout",
                value=self.request_timeout,
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ResolverConfig:
        """Build a config from ``CCIP_READ_*`` environment variables."""

        env = os.environ if environ is None else environ

        max_hops = DEFAULT_MAX_HOPS
        raw_hops = env.get(MAX_HOPS_ENV)
        if raw_hops:
            try:
                max_hops = int(raw_hops)
            except ValueError as exc:
                raise ValidationError(
                    f"{MAX_HOPS_ENV} must be an integer", field="max_hops", value=raw_hops
                ) from exc

        request_timeout = DEFAULT_REQUEST_TIMEOUT
        raw_timeout = env.get(REQUEST_TIMEOUT_ENV)
        if raw_timeout:
            try:
                request_timeout = float(raw_timeout)
            except ValueError as exc:
                raise ValidationError(
                    f"{REQUEST_TIMEOUT_ENV} must be a number",
                    field="request_timeout",
                    value=raw_timeout,
                ) from exc

        return cls(max_hops=max_hops, request_timeout=request_timeout)

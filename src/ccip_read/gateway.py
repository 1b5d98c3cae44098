"""Gateway fetching for offchain lookups.

Each ``OffchainLookup`` names an ordered list of gateway URL templates. The
templates are tried one after another; the first 2xx response wins and any
other outcome moves on to the next template.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from collections.abc import Callable, Sequence
from typing import Protocol

import requests

from .config import DEFAULT_REQUEST_TIMEOUT
from .constants import DATA_PLACEHOLDER, SENDER_PLACEHOLDER
from .exceptions import AllGatewaysFailedError, GatewayUnavailableError, ValidationError
from .types import Address, GatewayRequest, GatewayResponse
from .utils import to_bytes, to_hex

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Transport used to reach gateways.

    ``body`` is None for GET requests and a JSON document for POST requests.
    Implementations raise ``GatewayUnavailableError`` when the gateway cannot
    be reached at all.
    """

    async def fetch(self, url: str, body: str | None = None) -> GatewayResponse: ...


class RequestsFetcher:
    """Default ``Fetcher`` backed by ``requests``.

    Requests run on worker threads through ``asyncio.to_thread``. Unless a
    ``session`` is passed, every worker thread gets its own session built by
    ``session_factory``. A session passed explicitly is shared by all worker
    threads, so it must tolerate concurrent use.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._shared_session = session
        self._session_factory = session_factory
        self._local = threading.local()
        self._request_timeout = request_timeout

    @property
    def _session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
        return session

    async def fetch(self, url: str, body: str | None = None) -> GatewayResponse:
        return await asyncio.to_thread(self._fetch, url, body)

    def _fetch(self, url: str, body: str | None) -> GatewayResponse:
        try:
            if body is None:
                response = self._session.get(url, timeout=self._request_timeout)
            else:
                response = self._session.post(
                    url,
                    data=body,
                    headers={"Content-Type": "application/json"},
                    timeout=self._request_timeout,
                )
        except requests.RequestException as exc:
            raise GatewayUnavailableError(
                f"Failed to reach gateway {url}",
                endpoint=url,
                details={"error": str(exc)},
            ) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text}

        if not isinstance(payload, dict):
            payload = {"message": payload}

        return GatewayResponse(status_code=response.status_code, body=payload)


def render_url(template: str, request: GatewayRequest) -> str:
    """Substitute ``{sender}`` and ``{data}``; other braces are left alone."""
    args = request.as_args()
    return template.replace(SENDER_PLACEHOLDER, args["sender"]).replace(
        DATA_PLACEHOLDER, args["data"]
    )


def request_body(template: str, request: GatewayRequest) -> str | None:
    """Return the POST body for ``template`` or None when data travels in the URL."""
    if DATA_PLACEHOLDER in template:
        return None
    return json.dumps(request.as_args())


async def fetch_offchain_data(
    fetcher: Fetcher,
    urls: Sequence[str],
    sender: Address,
    call_data: bytes,
) -> bytes:
    """Query ``urls`` in order and return the first successful ``data`` payload."""
    request = GatewayRequest(sender=sender, data=call_data)

    for template in urls:
        url = render_url(template, request)
        body = request_body(template, request)
        logger.debug("Querying gateway %s (%s)", url, "GET" if body is None else "POST")

        try:
            response = await fetcher.fetch(url, body)
        except GatewayUnavailableError as exc:
            logger.warning("Gateway %s unreachable: %s", url, exc.details.get("error", exc))
            continue

        if response.is_client_error():
            logger.warning(
                "Bad response from gateway %s: status=%s message=%s",
                url,
                response.status_code,
                response.message,
            )
            continue

        if response.is_success():
            data = response.body.get("data")
            if isinstance(data, str):
                try:
                    return to_bytes(data, field="data")
                except ValidationError:
                    pass
            logger.warning("Gateway %s returned a success without valid hex data", url)
            continue

        logger.warning(
            "Server returned an error: url=%s sender=%s data=%s status=%s message=%s",
            url,
            sender,
            to_hex(call_data),
            response.status_code,
            response.message,
        )

    raise AllGatewaysFailedError(
        "All gateways returned an error",
        urls=list(urls),
        sender=sender,
        call_data=call_data,
        details={"urls": list(urls), "to": sender, "call_data": to_hex(call_data)},
    )

"""
Mapbox Static API client.

Builds request URLs from snapshot options and fetches the rendered image,
either blocking (fetch_sync) or on an asyncio event loop (fetch, fetch_async).
"""

import asyncio
import logging
from typing import Callable, Optional, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx
from PIL import Image

from ..config import Config, get_yaml_setting, resolve_access_token
from ..errors import SnapshotError, TransportError
from ..models.options import ClassicSnapshotOptions, MarkerOptions, SnapshotOptions
from ..processing.query_params import build_query_items, encode_query
from ..processing.request_path import build_path
from .responses import classify_response
from .user_agent import user_agent

logger = logging.getLogger(__name__)

AnyOptions = Union[ClassicSnapshotOptions, SnapshotOptions, MarkerOptions]
CompletionHandler = Callable[[Optional[Image.Image], Optional[SnapshotError]], None]


def redact_access_token(url: str) -> str:
    """Replace the access token in a URL so it can be logged."""
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    if not any(name == "access_token" for name, _ in query):
        return url
    redacted = [(name, "REDACTED" if name == "access_token" else value) for name, value in query]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(redacted), parts.fragment))


def _transport_error(error: httpx.RequestError) -> TransportError:
    description = str(error) or type(error).__name__
    return TransportError(
        f"The Static API request did not complete: {description}",
        failure_reason=description,
    )


class SnapshotTask:
    """
    Handle for a snapshot requested with fetch_async.

    Cancelling before the response arrives suppresses the completion handler;
    cancelling afterwards has no effect.
    """

    def __init__(self, task: "asyncio.Task[None]"):
        self._task = task

    def cancel(self) -> bool:
        """Cancel the request. Returns False if it already finished."""
        return self._task.cancel()

    def done(self) -> bool:
        return self._task.done()

    def cancelled(self) -> bool:
        return self._task.cancelled()

    def __await__(self):
        return self._task.__await__()


class SnapshotClient:
    """
    Client for the Mapbox Static API.

    The access token is resolved once, at construction: an explicit token wins
    over config.access_token, and a missing token raises ConfigurationError.
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        host: Optional[str] = None,
        config: Optional[Config] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
        async_http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.access_token = resolve_access_token(access_token, config)

        if host is None:
            host = config.api_host if config else get_yaml_setting("api", "host", default="api.mapbox.com")
        self.api_endpoint = host.rstrip("/") if "://" in host else f"https://{host}"

        if timeout is None:
            timeout = (
                config.timeout_seconds
                if config
                else float(get_yaml_setting("api", "timeout_seconds", default=30.0))
            )
        self.timeout = timeout

        self._headers = {"User-Agent": user_agent()}
        self._client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._async_client = async_http_client or httpx.AsyncClient(
            timeout=timeout, follow_redirects=True
        )

    def close(self):
        """Close the blocking HTTP client."""
        self._client.close()

    async def aclose(self):
        """Close both HTTP clients."""
        self._client.close()
        await self._async_client.aclose()

    def __enter__(self) -> "SnapshotClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    async def __aenter__(self) -> "SnapshotClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    def build_url(self, options: AnyOptions) -> str:
        """
        The HTTP URL used to fetch the snapshot.

        Pure: identical options always give an identical URL.

        Raises:
            ConfigurationError: The options are out of bounds
        """
        path = build_path(options)
        query = encode_query(build_query_items(options, self.access_token))
        return f"{self.api_endpoint}{path}?{query}"

    # Blocking API

    def _get_sync(self, url: str) -> Image.Image:
        logger.debug(f"GET {redact_access_token(url)}")
        try:
            response = self._client.get(url, headers=self._headers)
        except httpx.RequestError as e:
            raise _transport_error(e) from e
        return classify_response(response)

    def fetch_sync(self, options: AnyOptions) -> Optional[Image.Image]:
        """
        Fetch the snapshot, blocking the calling thread.

        Returns None on any network, service or decode failure; the details
        are only logged. Use fetch or fetch_async to get the error.
        """
        url = self.build_url(options)
        try:
            return self._get_sync(url)
        except SnapshotError as e:
            logger.warning(f"Snapshot request failed: {e}")
            return None

    # Asynchronous API

    async def _get(self, url: str) -> Image.Image:
        logger.debug(f"GET {redact_access_token(url)}")
        try:
            response = await self._async_client.get(url, headers=self._headers)
        except httpx.RequestError as e:
            raise _transport_error(e) from e
        return classify_response(response)

    async def fetch(self, options: AnyOptions) -> Image.Image:
        """
        Fetch the snapshot.

        Raises:
            ConfigurationError: The options are out of bounds
            TransportError: The service could not be reached
            ServiceError: The service reported an error (DecodeError if the
                body was not an image)
        """
        return await self._get(self.build_url(options))

    async def _deliver(
        self,
        url: str,
        handler: CompletionHandler,
        loop: Optional[asyncio.AbstractEventLoop],
    ) -> None:
        try:
            image = await self._get(url)
        except SnapshotError as e:
            logger.info(f"Snapshot request failed: {e}")
            result = (None, e)
        else:
            result = (image, None)

        if loop is None or loop is asyncio.get_running_loop():
            handler(*result)
        else:
            loop.call_soon_threadsafe(handler, *result)

    def fetch_async(
        self,
        options: AnyOptions,
        handler: CompletionHandler,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> SnapshotTask:
        """
        Start fetching the snapshot on the running event loop.

        handler(image, error) is called exactly once, with either an image or
        a SnapshotError, unless the returned task is cancelled first. It runs
        on the current loop, or on `loop` if one is given.

        Must be called from a coroutine or callback on a running event loop.

        Raises:
            ConfigurationError: The options are out of bounds (raised here,
                not passed to the handler)
        """
        url = self.build_url(options)
        task = asyncio.get_running_loop().create_task(self._deliver(url, handler, loop))
        return SnapshotTask(task)

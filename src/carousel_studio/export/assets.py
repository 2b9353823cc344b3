"""Image asset loading.

Sources are ``data:`` URLs, http(s) URLs or local file paths. Bytes are
fetched asynchronously, decoded with Pillow in a worker thread and cached by
source string. Concurrent requests for the same source share one load.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path
from typing import Iterable
from urllib.parse import unquote_to_bytes, urlparse

import httpx
from PIL import Image, UnidentifiedImageError
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from ..constants import ASSET_MAX_RETRIES, ASSET_TIMEOUT_SECONDS
from ..errors import AssetLoadError
from ..slides import Slide

_logger = logging.getLogger("assets")


def _is_transient(error: BaseException) -> bool:
    """Network failures and 5xx responses are worth retrying."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return isinstance(error, httpx.TransportError)


def decode_data_url(src: str) -> bytes:
    """Decode the payload of a ``data:`` URL.

    Raises:
        ValueError: Not a data URL or bad base64 payload.
    """
    header, sep, payload = src.partition(",")
    if not header.startswith("data:") or not sep:
        raise ValueError("malformed data URL")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=False)
        except binascii.Error as e:
            raise ValueError(f"invalid base64 payload: {e}") from e
    return unquote_to_bytes(payload)


class AssetLoader:
    """Fetch and decode image assets.

    Usage:
        async with AssetLoader() as loader:
            images = await loader.preload(slides)
            width, height = await loader.natural_size("https://example.com/a.png")
    """

    def __init__(
        self,
        timeout: float = ASSET_TIMEOUT_SECONDS,
        max_retries: int = ASSET_MAX_RETRIES,
        client: httpx.AsyncClient | None = None,
        base_dir: Path | None = None,
        max_concurrent: int = 4,
        retry_wait: wait_base | None = None,
    ):
        """Initialize the loader.

        Args:
            timeout: Timeout for remote fetches in seconds.
            max_retries: Attempts per remote fetch.
            client: HTTP client to use. Created lazily when omitted.
            base_dir: Directory relative file paths resolve against.
            max_concurrent: Maximum fetches in flight.
            retry_wait: Wait strategy between attempts.
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_dir = base_dir
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=2, max=10)
        self._http_client = client
        self._owns_client = client is None
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._cache: dict[str, Image.Image] = {}
        self._pending: dict[str, asyncio.Task] = {}

    async def __aenter__(self) -> "AssetLoader":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    def is_loaded(self, src: str) -> bool:
        return src in self._cache

    def clear(self) -> None:
        self._cache.clear()

    # =========================================================================
    # Fetching
    # =========================================================================

    async def _fetch_remote(self, url: str) -> bytes:
        client = await self._get_client()
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=self.retry_wait,
            retry=retry_if_exception(_is_transient),
            reraise=True,
        ):
            with attempt:
                response = await client.get(url)
                response.raise_for_status()
                return response.content
        raise AssertionError("unreachable")

    def _local_path(self, src: str) -> Path:
        if src.startswith("file://"):
            path = Path(urlparse(src).path)
        else:
            path = Path(src)
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        return path

    async def fetch_bytes(self, src: str) -> bytes:
        """Raw bytes of an asset.

        Raises:
            AssetLoadError: The source could not be read.
        """
        try:
            if src.startswith("data:"):
                return decode_data_url(src)
            if src.startswith(("http://", "https://")):
                async with self._semaphore:
                    return await self._fetch_remote(src)
            return await asyncio.to_thread(self._local_path(src).read_bytes)
        except httpx.HTTPStatusError as e:
            raise AssetLoadError(src, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise AssetLoadError(src, f"request failed: {e}") from e
        except ValueError as e:
            raise AssetLoadError(src, str(e)) from e
        except OSError as e:
            raise AssetLoadError(src, f"cannot read file: {e.strerror or e}") from e

    # =========================================================================
    # Decoding
    # =========================================================================

    @staticmethod
    def _decode(data: bytes) -> Image.Image:
        image = Image.open(BytesIO(data))
        image.load()
        return image

    async def _load(self, src: str) -> Image.Image:
        data = await self.fetch_bytes(src)
        try:
            image = await asyncio.to_thread(self._decode, data)
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise AssetLoadError(src, f"cannot decode image: {e}") from e
        _logger.debug(f"ASSET_LOADED | size:{image.width}x{image.height} | bytes:{len(data)}")
        return image

    async def load(self, src: str) -> Image.Image:
        """Load and decode one asset, using the cache.

        Raises:
            AssetLoadError: The asset could not be fetched or decoded.
        """
        if src in self._cache:
            return self._cache[src]

        task = self._pending.get(src)
        if task is None:
            task = asyncio.ensure_future(self._load(src))
            self._pending[src] = task
        try:
            image = await task
        finally:
            if self._pending.get(src) is task:
                del self._pending[src]

        self._cache[src] = image
        return image

    async def natural_size(self, src: str) -> tuple[int, int]:
        """Pixel size of an asset."""
        image = await self.load(src)
        return image.width, image.height

    async def preload(self, slides: Iterable[Slide]) -> dict[str, Image.Image]:
        """Load every image the slides paint.

        All sources load concurrently; nothing is returned until every one of
        them is decoded.

        Returns:
            Decoded images keyed by source.

        Raises:
            AssetLoadError: Attributed to the first slide (and element)
                referencing a source that failed.
        """
        references: list[tuple[int, str | None, str]] = []
        for slide_index, slide in enumerate(slides):
            if slide.background_image:
                references.append((slide_index, None, slide.background_image))
            for element in slide.elements:
                if element.type == "image":
                    references.append((slide_index, element.id, element.src))

        sources = list(dict.fromkeys(src for _, _, src in references))
        results = await asyncio.gather(
            *(self.load(src) for src in sources),
            return_exceptions=True,
        )
        loaded = dict(zip(sources, results))

        for slide_index, element_id, src in references:
            result = loaded[src]
            if isinstance(result, AssetLoadError):
                _logger.warning(
                    f"ASSET_FAILED | slide:{slide_index + 1} | element:{element_id} | {result.reason}"
                )
                raise result.locate(slide_index, element_id)
            if isinstance(result, BaseException):
                raise result

        _logger.info(f"ASSETS_READY | count:{len(sources)}")
        return loaded

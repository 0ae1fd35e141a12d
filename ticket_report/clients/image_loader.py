"""
Photo loader for the report generator.

Fetches a photo (HTTP(S) URL, ``data:`` URL or local file), decodes it
with Pillow and re-encodes it as a JPEG at a fixed quality so the size
of the finished PDF stays bounded.
"""

import asyncio
import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import httpx
from PIL import Image, ImageOps, UnidentifiedImageError
from tenacity import (
    AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential
)

from ticket_report.config import settings

logger = logging.getLogger(__name__)

_TRANSIENT_STATUSES = frozenset({429, 502, 503, 504})


class ImageLoadError(Exception):
    """Photo could not be fetched or decoded"""
    pass


class TransientImageError(ImageLoadError):
    """Temporary failure worth retrying (network error, 429/5xx)"""
    pass


@dataclass(frozen=True)
class LoadedImage:
    """JPEG-encoded bitmap ready to be embedded in the PDF."""
    data: bytes
    width: int
    height: int

    def as_stream(self) -> io.BytesIO:
        return io.BytesIO(self.data)


class ImageLoader:
    """Loads photos one at a time; every call is independent."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        quality: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        retry_wait=None,
    ):
        self.timeout = settings.IMAGE_FETCH_TIMEOUT if timeout is None else timeout
        self.retries = max(1, settings.IMAGE_FETCH_RETRIES if retries is None else retries)
        self.quality = settings.IMAGE_JPEG_QUALITY if quality is None else quality
        self._transport = transport
        self._retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=8)

    async def fetch(self, url: str) -> LoadedImage:
        """
        Load *url* and return it re-encoded as JPEG.

        Raises:
            ImageLoadError: network failure, HTTP error, unreadable file
                or bytes that are not a decodable image.
        """
        raw = await self._read(url)
        return await asyncio.to_thread(self._encode, raw, url)

    # ── Sources ──────────────────────────────────────────────────────────

    async def _read(self, url: str) -> bytes:
        if not url:
            raise ImageLoadError("Empty image URL")

        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise ImageLoadError(f"Malformed image URL {url!r}: {e}") from e

        scheme = parsed.scheme.lower()
        if scheme in ("http", "https"):
            return await self._download(url)
        if scheme == "data":
            return self._decode_data_url(url)
        if scheme == "file":
            return self._read_file(Path(unquote(parsed.path)))
        if scheme and len(scheme) > 1:
            raise ImageLoadError(f"Unsupported image URL scheme: {scheme}")
        return self._read_file(Path(url))

    async def _download(self, url: str) -> bytes:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retries),
            wait=self._retry_wait,
            retry=retry_if_exception_type(TransientImageError),
            reraise=True,
        ):
            with attempt:
                return await self._get(url)
        raise ImageLoadError(f"No attempt made for {url}")  # pragma: no cover

    async def _get(self, url: str) -> bytes:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(url)
        except httpx.TransportError as e:
            logger.warning(f"Image request failed for {url}: {e!r}")
            raise TransientImageError(f"Network error for {url}: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ImageLoadError(f"Cannot request {url!r}: {e}") from e

        if response.status_code in _TRANSIENT_STATUSES:
            logger.warning(f"Image server returned {response.status_code} for {url}, retrying...")
            raise TransientImageError(f"HTTP {response.status_code} for {url}")
        if response.status_code >= 400:
            raise ImageLoadError(f"HTTP {response.status_code} for {url}")
        return response.content

    @staticmethod
    def _decode_data_url(url: str) -> bytes:
        header, _, payload = url.partition(",")
        try:
            if header.endswith(";base64"):
                return base64.b64decode(payload, validate=True)
            return unquote(payload).encode("latin-1")
        except (ValueError, UnicodeEncodeError) as e:
            raise ImageLoadError(f"Malformed data URL: {e}") from e

    @staticmethod
    def _read_file(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except (OSError, ValueError) as e:
            raise ImageLoadError(f"Cannot read image file {path}: {e}") from e

    # ── Decoding ─────────────────────────────────────────────────────────

    def _encode(self, raw: bytes, url: str) -> LoadedImage:
        try:
            with Image.open(io.BytesIO(raw)) as img:
                img.load()
                img = ImageOps.exif_transpose(img)
                rgb = _flatten(img)
                out = io.BytesIO()
                rgb.save(out, format="JPEG", quality=self.quality, optimize=True)
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
            raise ImageLoadError(f"Cannot decode image {url}: {e}") from e

        logger.debug(f"Loaded image {url}: {rgb.width}x{rgb.height}, {len(out.getvalue())} bytes")
        return LoadedImage(data=out.getvalue(), width=rgb.width, height=rgb.height)


def _flatten(img: Image.Image) -> Image.Image:
    """Convert to RGB, compositing transparency over white."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img

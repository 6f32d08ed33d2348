"""Fetching the astronomy picture of the day and the images it points at."""

from __future__ import annotations

import logging
import re
import urllib.request
from abc import abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Optional, TypeVar
from urllib.parse import urljoin

from .cached_proxy import CachedProxyPolicy
from .errors import APODDataRequestFailed

log = logging.getLogger(__name__)

APOD_BASE_URL = "https://apod.nasa.gov/apod/ap"
USER_AGENT = "ApodHtmlFetcher/1.0"
DEFAULT_TIMEOUT = 30.0

T = TypeVar("T")

_IMG_RE = re.compile(r'<img[^>]*\s+src="([^"]+)"[^>]*>', re.IGNORECASE)
_TITLE_RE = re.compile(r"<b>\s*(?P<title>[^<]+)\s*</b>\s*<br>", re.IGNORECASE)
_EXPL_RE = re.compile(
    r"<b>\s*Explanation:\s*</b>(?P<expl>.*?)</center>", re.IGNORECASE | re.DOTALL
)
_TAG_RE = re.compile(r"<[^>]+>")
_NEWLINE_RE = re.compile(r"\s*\n\s*")
_SPACES_RE = re.compile(r"\s{2,}")

_IMAGE_SIGNATURES = (
    b"\x89PNG\r\n\x1a\n",
    b"\xff\xd8\xff",
    b"GIF87a",
    b"GIF89a",
    b"BM",
)


def _looks_like_image(data: Optional[bytes]) -> bool:
    """True if the bytes start like a PNG, JPEG, GIF, BMP or WebP image."""
    if not data:
        return False
    if data.startswith(_IMAGE_SIGNATURES):
        return True
    return data[:4] == b"RIFF" and data[8:12] == b"WEBP"


@dataclass
class ApodData:
    """One picture of the day: the image bytes, where it came from, and its text."""

    image: Optional[bytes] = None
    image_url: str = ""
    title: str = ""
    descriptions: str = ""


class NetworkQuery(CachedProxyPolicy[T]):
    """A policy that downloads one URL and turns the body into a value."""

    def __init__(self, url: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.url = url
        self.timeout = timeout

    def fetch(self) -> bytes:
        """Download the URL and return the body; raises OSError on failure."""
        if not self.url:
            raise ValueError("no url to fetch")
        request = urllib.request.Request(self.url, headers={"User-Agent": USER_AGENT})
        with urllib.request.urlopen(request, timeout=self.timeout) as reply:
            return reply.read()

    def handlable(self) -> bool:
        return True

    def factorized(self) -> Optional[T]:
        """The value built from the download, or None if the download failed."""
        try:
            body = self.fetch()
        except (OSError, ValueError) as err:
            log.debug("%s: %s", self.url, err)
            return None
        return self._make_components(body)

    @abstractmethod
    def _make_components(self, body: bytes) -> T:
        """Build the value from a downloaded body."""


class ImageFetch(NetworkQuery[bytes]):
    """Downloads an image and returns its raw bytes."""

    def _make_components(self, body: bytes) -> bytes:
        return body


def apod_url(day: date) -> str:
    """The page address of the picture of the given day."""
    return f"{APOD_BASE_URL}{day.strftime('%y%m%d')}.html"


def parse_apod_page(html: str) -> ApodData:
    """Pick the image source, title and explanation out of a picture page."""
    img_match = _IMG_RE.search(html)
    image_url = img_match.group(1) if img_match else ""

    title_match = _TITLE_RE.search(html)
    title = title_match.group("title").strip() if title_match else "<no title>"

    expl_match = _EXPL_RE.search(html)
    if expl_match:
        explanation = _TAG_RE.sub("", expl_match.group("expl").strip())
    else:
        explanation = "<no explanation found>"

    cut = explanation.find("Tomorrow's picture")
    if cut != -1:
        explanation = explanation[:cut]
    explanation = _NEWLINE_RE.sub("\n", explanation)
    explanation = _SPACES_RE.sub(" ", explanation)
    explanation = explanation.strip()

    return ApodData(image_url=image_url, title=title, descriptions=explanation)


class ApodFetcher(NetworkQuery[ApodData]):
    """Fetches the picture of a chosen day, page and image together."""

    def __init__(self, day: Optional[date] = None) -> None:
        super().__init__()
        self.request_date: date = date.today()
        self.set_date(day if day is not None else date.today())

    def set_date(self, day: date) -> None:
        """Choose the day to fetch."""
        self.request_date = day
        self.url = apod_url(day)

    def _make_components(self, body: bytes) -> ApodData:
        page = parse_apod_page(body.decode("utf-8", errors="replace"))
        resolved = urljoin(self.url or "", page.image_url)
        image_fetcher = ImageFetch(resolved, self.timeout)
        try:
            image = image_fetcher.factorized()
            if image is None:
                raise APODDataRequestFailed("Image Request Failed!")
            if not _looks_like_image(image):
                raise APODDataRequestFailed(
                    "Image Request Success, but the image is invalid!"
                )
        except APODDataRequestFailed as err:
            log.warning("APOD make_components exception: %s", err)
            return ApodData()
        page.image = image
        return page
import urllib.error
from datetime import date
from unittest import mock

import pytest

from planboard.apod import (
    ApodData,
    ApodFetcher,
    ImageFetch,
    apod_url,
    parse_apod_page,
)

PNG = b"\x89PNG\r\n\x1a\n" + b"pixels"

PAGE = """<html><body><center>
<a href="image/2401/Nebula_big.jpg"><IMG SRC="image/2401/Nebula_small.jpg" alt="x"></a>
</center>
<center><b> Glowing Nebula </b> <br>
<b> Image Credit: </b> Someone
</center>
<p><b> Explanation: </b> A <a href="x">bright</a> cloud
   of gas.
 Tomorrow's picture: another</p>
<center>end</center>
</body></html>"""


class _Reply:
    def __init__(self, body):
        self.body = body

    def read(self):
        return self.body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _server(pages):
    def fake(request, timeout=None):
        url = request.full_url
        if url not in pages:
            raise urllib.error.URLError("unreachable")
        return _Reply(pages[url])

    return fake


def test_apod_url_format():
    assert apod_url(date(2024, 1, 5)) == "https://apod.nasa.gov/apod/ap240105.html"


def test_parse_apod_page_extracts_parts():
    data = parse_apod_page(PAGE)
    assert data.image_url == "image/2401/Nebula_small.jpg"
    assert data.title == "Glowing Nebula"
    assert data.descriptions == "A bright cloud\nof gas."
    assert data.image is None


def test_parse_apod_page_defaults_when_missing():
    data = parse_apod_page("<html><body>nothing here</body></html>")
    assert data.image_url == ""
    assert data.title == "<no title>"
    assert data.descriptions == "<no explanation found>"


def test_fetcher_url_follows_date():
    fetcher = ApodFetcher(date(2024, 1, 5))
    assert fetcher.url == apod_url(date(2024, 1, 5))
    fetcher.set_date(date(2023, 12, 31))
    assert fetcher.request_date == date(2023, 12, 31)
    assert fetcher.url == apod_url(date(2023, 12, 31))
    assert fetcher.handlable() is True


def test_fetcher_downloads_page_and_image():
    fetcher = ApodFetcher(date(2024, 1, 5))
    pages = {
        fetcher.url: PAGE.encode(),
        "https://apod.nasa.gov/apod/image/2401/Nebula_small.jpg": PNG,
    }
    with mock.patch("urllib.request.urlopen", side_effect=_server(pages)):
        data = fetcher.factorized()
    assert data.image == PNG
    assert data.image_url == "image/2401/Nebula_small.jpg"
    assert data.title == "Glowing Nebula"


def test_fetcher_returns_none_when_page_fails():
    fetcher = ApodFetcher(date(2024, 1, 5))
    with mock.patch("urllib.request.urlopen", side_effect=_server({})):
        assert fetcher.factorized() is None


def test_fetcher_returns_empty_data_when_image_fails():
    fetcher = ApodFetcher(date(2024, 1, 5))
    with mock.patch("urllib.request.urlopen", side_effect=_server({fetcher.url: PAGE.encode()})):
        assert fetcher.factorized() == ApodData()


def test_fetcher_rejects_non_image_body():
    fetcher = ApodFetcher(date(2024, 1, 5))
    pages = {
        fetcher.url: PAGE.encode(),
        "https://apod.nasa.gov/apod/image/2401/Nebula_small.jpg": b"<html>not an image</html>",
    }
    with mock.patch("urllib.request.urlopen", side_effect=_server(pages)):
        assert fetcher.factorized() == ApodData()


def test_image_fetch_returns_bytes():
    url = "https://example.com/a.png"
    with mock.patch("urllib.request.urlopen", side_effect=_server({url: PNG})):
        assert ImageFetch(url).factorized() == PNG


def test_image_fetch_without_url_raises():
    with pytest.raises(ValueError):
        ImageFetch().fetch()


def test_image_fetch_without_url_gives_none():
    assert ImageFetch().factorized() is None
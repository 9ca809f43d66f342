"""
Unit tests for the Nominatim center lookup and PNG export.
"""

import pytest
import requests
from PIL import Image

from trackheat import geocode
from trackheat.core.models import CanvasSpec
from trackheat.core.render import create_canvas
from trackheat.export import save_png
from trackheat.geocode import lookup_center
from trackheat.utils.constants import GEOCODER_USER_AGENT, NOMINATIM_SEARCH_URL


class FakeResponse:
    def __init__(self, payload=None, status_error=None, json_error=None):
        self.payload = payload
        self.status_error = status_error
        self.json_error = json_error

    def raise_for_status(self):
        if self.status_error is not None:
            raise self.status_error

    def json(self):
        if self.json_error is not None:
            raise self.json_error
        return self.payload


@pytest.fixture
def fake_get(monkeypatch):
    """Replace requests.get; set .response before calling lookup_center."""
    calls = []

    def _get(url, **kwargs):
        calls.append((url, kwargs))
        if isinstance(_get.response, Exception):
            raise _get.response
        return _get.response

    _get.calls = calls
    _get.response = FakeResponse([])
    monkeypatch.setattr(geocode.requests, "get", _get)
    return _get


class TestLookupCenter:
    """Test place name resolution."""

    def test_first_result(self, fake_get, monkeypatch):
        """Test the first match is returned as (lat, lon) floats."""
        monkeypatch.delenv("TRACKHEAT_USER_AGENT", raising=False)
        fake_get.response = FakeResponse([
            {"lat": "59.9133301", "lon": "10.7389701", "display_name": "Oslo, Norway"},
            {"lat": "0", "lon": "0"},
        ])
        assert lookup_center("Oslo") == pytest.approx((59.9133301, 10.7389701))

        url, kwargs = fake_get.calls[0]
        assert url == NOMINATIM_SEARCH_URL
        assert kwargs["params"] == {"q": "Oslo", "format": "json", "limit": 1}
        assert kwargs["headers"]["User-Agent"] == GEOCODER_USER_AGENT
        assert kwargs["timeout"] > 0

    def test_user_agent_override(self, fake_get, monkeypatch):
        """Test TRACKHEAT_USER_AGENT replaces the default User-Agent."""
        monkeypatch.setenv("TRACKHEAT_USER_AGENT", "my-heatmaps/1.0 (me@example.com)")
        lookup_center("Oslo")
        assert fake_get.calls[0][1]["headers"]["User-Agent"] == "my-heatmaps/1.0 (me@example.com)"

    def test_no_results(self, fake_get):
        """Test an empty result list gives None."""
        fake_get.response = FakeResponse([])
        assert lookup_center("Nowhere at all") is None

    @pytest.mark.parametrize("response", [
        requests.ConnectionError("offline"),
        requests.Timeout("slow"),
        FakeResponse(status_error=requests.HTTPError("503")),
        FakeResponse(json_error=ValueError("not json")),
        FakeResponse([{"display_name": "no coordinates"}]),
        FakeResponse([{"lat": "north", "lon": "10"}]),
    ])
    def test_failures_give_none(self, fake_get, response):
        """Test network, HTTP and payload problems all give None."""
        fake_get.response = response
        assert lookup_center("Oslo") is None


class TestSavePng:
    """Test PNG export."""

    def test_writes_png_and_creates_directories(self, tmp_path):
        """Test the canvas is written as PNG under a new directory."""
        canvas = create_canvas(CanvasSpec(8, 4), (1, 2, 3, 255))
        out_file = save_png(canvas, tmp_path / "maps" / "out.png")

        with Image.open(out_file) as image:
            assert image.format == "PNG"
            assert image.size == (8, 4)
            assert image.convert("RGBA").getpixel((0, 0)) == (1, 2, 3, 255)

"""
Pytest configuration for trackheat tests.

Shared fixtures for writing track files and activity directories.
"""

import gzip
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import pytest

GPX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx version="1.1" creator="trackheat-tests" xmlns="http://www.topografix.com/GPX/1/1">\n'
)

# Center used by the stub geocoder; with a 100x50 canvas at scale 1.0 the
# window is lon [9.8, 10.2], lat [59.94, 60.06].
CENTER_LAT = 60.0
CENTER_LON = 10.0


def gpx_document(tracks: Sequence[Sequence[Sequence[Tuple[float, float]]]]) -> str:
    """Build a GPX document; tracks -> segments -> (lon, lat) points."""
    body = []
    for segments in tracks:
        body.append("  <trk>\n")
        for segment in segments:
            body.append("    <trkseg>\n")
            for lon, lat in segment:
                body.append(f'      <trkpt lat="{lat}" lon="{lon}"></trkpt>\n')
            body.append("    </trkseg>\n")
        body.append("  </trk>\n")
    return GPX_HEADER + "".join(body) + "</gpx>\n"


@pytest.fixture
def write_gpx():
    """Return a helper writing a GPX file from tracks -> segments -> (lon, lat)."""
    def _write(path: Path, tracks) -> Path:
        path.write_text(gpx_document(tracks), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_manifest():
    """Return a helper writing activities.csv from a header and rows."""
    def _write(directory: Path, header: List[str], rows: List[List[str]]) -> Path:
        import csv

        path = directory / "activities.csv"
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
        return path
    return _write


@pytest.fixture
def fake_fit_gz(tmp_path):
    """A gzip file with arbitrary payload, for tests that replace FitFile."""
    path = tmp_path / "ride.fit.gz"
    with gzip.open(path, "wb") as f:
        f.write(b"payload ignored by FakeFitFile")
    return path


@pytest.fixture
def stub_geocoder():
    """Geocoder that always resolves to (CENTER_LAT, CENTER_LON)."""
    calls: List[str] = []

    def _lookup(name: str):
        calls.append(name)
        return CENTER_LAT, CENTER_LON

    _lookup.calls = calls
    return _lookup


@pytest.fixture
def opaque_colors() -> Dict[str, Tuple[int, int, int, int]]:
    return {"Ride": (255, 0, 0, 255), "Run": (0, 0, 255, 255)}


class FakeMessage:
    """Stand-in for fitparse.DataMessage."""

    def __init__(self, name: str, **values):
        self.name = name
        self._values = values

    def get_value(self, field_name):
        return self._values.get(field_name)


class FakeFitFile:
    """Stand-in for fitparse.FitFile yielding a fixed message list."""

    messages: List[FakeMessage] = []
    error: Exception = None

    def __init__(self, fileish, *args, **kwargs):
        self.fileish = fileish

    def get_messages(self, name=None, *args, **kwargs):
        for message in self.messages:
            yield message
        if self.error is not None:
            raise self.error


def semicircles(degrees: float) -> int:
    return int(round(degrees * 2**31 / 180.0))


def fit_file_with(messages: List[FakeMessage], error: Exception = None):
    """Build a FakeFitFile subclass serving messages, optionally failing afterwards."""
    return type("ScriptedFitFile", (FakeFitFile,), {"messages": list(messages), "error": error})

from __future__ import annotations

import io
import zipfile
from typing import Dict, Iterable, Optional, Sequence

import pytest

COUNTRY_ROWS = [["US", "United States"], ["CA", "Canada"]]
ZONE_ROWS = [
    ["1", "US", "America/New_York"],
    ["2", "US", "America/Chicago"],
    ["3", "ZZ", "Nowhere/Invalid"],
    ["4", "CA", "America/Toronto"],
]
KNOWN_ZONES = {"America/New_York", "America/Chicago", "America/Toronto", "Europe/Paris"}


def to_csv(rows: Iterable[Sequence[str]]) -> bytes:
    out = io.StringIO()
    for row in rows:
        out.write(",".join(row) + "\r\n")
    return out.getvalue().encode("utf-8")


def to_zip(entries: Dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, payload in entries.items():
            zf.writestr(name, payload)
    return buf.getvalue()


@pytest.fixture
def make_archive():
    def _make(countries=COUNTRY_ROWS, zones=ZONE_ROWS, extra: Optional[Dict[str, bytes]] = None) -> bytes:
        entries = {"country.csv": to_csv(countries), "zone.csv": to_csv(zones)}
        entries.update(extra or {})
        return to_zip(entries)
    return _make


@pytest.fixture
def known_zone():
    return KNOWN_ZONES.__contains__


class FakeResponse:
    def __init__(self, status_code: int = 200, body: bytes = b"", reason: str = "OK"):
        self.status_code = status_code
        self.reason = reason
        self.headers = {"Content-Length": str(len(body))}
        self._body = body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self._body), chunk_size):
            yield self._body[i:i + chunk_size]


@pytest.fixture
def fake_response():
    return FakeResponse

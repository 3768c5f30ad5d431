from __future__ import annotations

import io
import zipfile
import zlib
from typing import BinaryIO, Dict, Tuple

import requests
from tqdm import tqdm

from ._common import USER_AGENT
from .errors import ArchiveError, FetchError, MissingEntryError

def fetch_archive(url: str, *, timeout: int = 120, progress: bool = True) -> bytes:
    headers = {"User-Agent": USER_AGENT}
    try:
        with requests.get(url, headers=headers, stream=True, timeout=timeout) as r:
            if r.status_code != 200:
                raise FetchError(f"GET {url}: response status is {r.status_code} {r.reason}")
            total = int(r.headers.get("Content-Length", "0") or 0)
            buf = io.BytesIO()
            name = url.rsplit("/", 1)[-1]
            with tqdm(total=total, unit="B", unit_scale=True, desc=name, disable=not progress) as bar:
                for chunk in r.iter_content(chunk_size=1024 * 1024):
                    if not chunk:
                        continue
                    buf.write(chunk)
                    bar.update(len(chunk))
    except requests.RequestException as exc:
        raise FetchError(f"GET {url}: {exc}") from exc
    return buf.getvalue()

def open_entries(data: bytes, country_entry: str, zone_entry: str) -> Tuple[BinaryIO, BinaryIO]:
    try:
        zf = zipfile.ZipFile(io.BytesIO(data), "r")
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"read zip: {exc}") from exc

    with zf:
        found: Dict[str, zipfile.ZipInfo] = {}
        for info in zf.infolist():
            if info.filename in (country_entry, zone_entry):
                found[info.filename] = info

        streams = []
        for entry in (country_entry, zone_entry):
            info = found.get(entry)
            if info is None:
                raise MissingEntryError(entry)
            try:
                streams.append(io.BytesIO(zf.read(info)))
            except (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError, EOFError) as exc:
                raise ArchiveError(f"open archive file {entry}: {exc}") from exc
    return streams[0], streams[1]

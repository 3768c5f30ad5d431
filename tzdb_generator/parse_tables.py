from __future__ import annotations

import codecs
import csv
import io
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, List, NamedTuple

from .errors import ParseError

# Country columns
COUNTRY_CODE = 0
COUNTRY_NAME = 1
COUNTRY_WIDTH = 2

# Zone columns
ZONE_ID = 0
ZONE_CODE = 1
ZONE_NAME = 2
ZONE_WIDTH = 3


class CountryRow(NamedTuple):
    code: str
    name: str


class ZoneRow(NamedTuple):
    id: str
    code: str
    name: str


@dataclass(frozen=True)
class Zone:
    country_code: str
    name: str


@dataclass
class Country:
    code: str
    name: str
    zones: List[Zone] = field(default_factory=list)


def iter_rows(stream: BinaryIO, width: int, table: str) -> Iterator[List[str]]:
    """Yield the non-blank rows of a header-less CSV stream.

    Every row must have exactly ``width`` columns; anything else, as well as
    undecodable bytes or a CSV syntax error, raises ParseError with the
    offending line.
    """
    try:
        data = stream.read()
    except OSError as exc:
        raise ParseError(table, 1, f"read: {exc}") from exc
    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8):]
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(table, data.count(b"\n", 0, exc.start) + 1, str(exc)) from exc

    reader = csv.reader(io.StringIO(text, newline=""))
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise ParseError(table, reader.line_num, str(exc)) from exc
        if not row:
            continue
        if len(row) != width:
            raise ParseError(table, reader.line_num, f"expected {width} columns, got {len(row)}")
        yield row


def parse_countries(stream: BinaryIO, table: str = "country") -> List[Country]:
    countries = []
    for row in iter_rows(stream, COUNTRY_WIDTH, table):
        rec = CountryRow(code=row[COUNTRY_CODE], name=row[COUNTRY_NAME])
        countries.append(Country(code=rec.code, name=rec.name))
    return countries


def parse_zones(stream: BinaryIO, table: str = "zone") -> List[Zone]:
    zones = []
    for row in iter_rows(stream, ZONE_WIDTH, table):
        rec = ZoneRow(id=row[ZONE_ID], code=row[ZONE_CODE], name=row[ZONE_NAME])
        zones.append(Zone(country_code=rec.code, name=rec.name))
    return zones

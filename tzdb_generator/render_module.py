from __future__ import annotations

import re
from string import Template
from typing import Iterable, List

from .errors import RenderError
from .parse_tables import Country, Zone

OUTPUT = Template('''\
# GENERATED FILE DO NOT MODIFY DIRECTLY
# source: $source_url
# sha256: $archive_sha256
"""Countries and their time zones, sorted by name."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class Zone:
    country_code: str
    name: str


@dataclass(frozen=True)
class Country:
    code: str
    name: str
    zones: Tuple[Zone, ...]


COUNTRIES: Tuple[Country, ...] = (
$countries)

_lock = threading.Lock()
_mapped: Optional[Mapping[str, Country]] = None


def _index() -> Mapping[str, Country]:
    # load + index countries into a read-only map, once
    global _mapped
    if _mapped is None:
        with _lock:
            if _mapped is None:
                mapped = {}
                for c in COUNTRIES:
                    mapped[c.code] = c
                _mapped = MappingProxyType(mapped)
    return _mapped


def get_countries() -> Tuple[Country, ...]:
    """Return all countries.

    Most common use: loading into a country dropdown.
    """
    return COUNTRIES


def get_country(code: str) -> Tuple[Optional[Country], bool]:
    """Return the Country matching ``code`` and whether it was found."""
    c = _index().get(code)
    return c, c is not None
''')

COUNTRY = Template('''\
    Country(
        code=$code,
        name=$name,
        zones=($zones),
    ),
''')

ZONE = Template('''\
            Zone(country_code=$country_code, name=$name),
''')

_SHA256 = re.compile(r"[0-9a-f]{64}")

def py_str(value: object, what: str) -> str:
    if not isinstance(value, str):
        raise RenderError(f"{what} must be a string, got {type(value).__name__}")
    return repr(value)

def _render_zones(zones: List[Zone]) -> str:
    if not zones:
        return ""
    parts = [
        ZONE.substitute(
            country_code=py_str(z.country_code, "zone country code"),
            name=py_str(z.name, "zone name"),
        )
        for z in zones
    ]
    return "\n" + "".join(parts) + "        "

def render_module(countries: Iterable[Country], *, source_url: str, archive_sha256: str) -> str:
    if "\n" in source_url or "\r" in source_url:
        raise RenderError("source URL must be a single line")
    if not _SHA256.fullmatch(archive_sha256):
        raise RenderError(f"not a sha256 hex digest: {archive_sha256!r}")
    try:
        blocks = [
            COUNTRY.substitute(
                code=py_str(c.code, "country code"),
                name=py_str(c.name, "country name"),
                zones=_render_zones(c.zones),
            )
            for c in countries
        ]
        return OUTPUT.substitute(
            source_url=source_url,
            archive_sha256=archive_sha256,
            countries="".join(blocks),
        )
    except (KeyError, ValueError) as exc:
        raise RenderError(f"executing template: {exc}") from exc

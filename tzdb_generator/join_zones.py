from __future__ import annotations

import zoneinfo
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Callable, Dict, Iterable, List

from .parse_tables import Country, Zone

def is_known_zone(name: str) -> bool:
    if not name:
        return False
    try:
        zoneinfo.ZoneInfo(name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True

@dataclass
class JoinResult:
    countries: List[Country]
    invalid_zones: List[str] = field(default_factory=list)
    orphaned_zones: int = 0
    duplicate_codes: List[str] = field(default_factory=list)

    @property
    def zone_count(self) -> int:
        return sum(len(c.zones) for c in self.countries)

def join_zones(
    countries: Iterable[Country],
    zones: Iterable[Zone],
    *,
    validator: Callable[[str], bool] = is_known_zone,
) -> JoinResult:
    result = JoinResult(countries=[])
    index: Dict[str, int] = {}

    for c in countries:
        if c.code in index:
            # The earlier record stays in the output but no longer receives zones.
            result.duplicate_codes.append(c.code)
            print(f"[warn] duplicate country code {c.code!r}: {c.name!r} replaces "
                  f"{result.countries[index[c.code]].name!r} in the index")
        index[c.code] = len(result.countries)
        result.countries.append(c)

    for z in zones:
        if not validator(z.name):
            result.invalid_zones.append(z.name)
            print(f"[warn] invalid zone {z.name!r} ({z.country_code}): unknown time zone, skipped")
            continue
        idx = index.get(z.country_code)
        if idx is None:
            result.orphaned_zones += 1
            continue
        result.countries[idx].zones.append(z)

    return result

def sort_countries(countries: Iterable[Country]) -> List[Country]:
    # sorted is stable: equal names keep their input order
    by_name = attrgetter("name")
    ordered = sorted(countries, key=by_name)
    for c in ordered:
        c.zones = sorted(c.zones, key=by_name)
    return ordered

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List, Optional

from ._common import GeneratorConfig, load_config, resolve_config_path, sha256_bytes, write_text_atomic
from .download_timezonedb import fetch_archive, open_entries
from .errors import GeneratorError
from .format_output import run_formatter
from .join_zones import JoinResult, is_known_zone, join_zones, sort_countries
from .parse_tables import Country, parse_countries, parse_zones
from .render_module import render_module

def build_countries(
    data: bytes,
    cfg: GeneratorConfig,
    *,
    validator: Callable[[str], bool] = is_known_zone,
) -> JoinResult:
    cf, zf = open_entries(data, cfg.country_entry, cfg.zone_entry)
    with cf, zf:
        countries = parse_countries(cf, table=cfg.country_entry)
        zones = parse_zones(zf, table=cfg.zone_entry)
    result = join_zones(countries, zones, validator=validator)
    result.countries = sort_countries(result.countries)
    return result

def generate(
    cfg: GeneratorConfig,
    *,
    validator: Callable[[str], bool] = is_known_zone,
) -> List[Country]:
    print(f"[run]  download {cfg.url}")
    data = fetch_archive(cfg.url, timeout=cfg.timeout, progress=cfg.progress)
    digest = sha256_bytes(data)

    print(f"[run]  process {cfg.country_entry}, {cfg.zone_entry}")
    result = build_countries(data, cfg, validator=validator)

    text = render_module(result.countries, source_url=cfg.url, archive_sha256=digest)
    write_text_atomic(cfg.output_path, text)
    run_formatter(cfg.output_path, cfg.formatter_command, required=cfg.formatter_required)

    print(f"Countries: {len(result.countries)}")
    print(f"Zones: {result.zone_count}")
    print(f"Zones skipped (invalid): {len(result.invalid_zones)}")
    print(f"Zones skipped (unknown country): {result.orphaned_zones}")
    print(f"Duplicate country codes: {len(result.duplicate_codes)}")
    print(f"Output: {cfg.output_path}")
    return result.countries

def main(config_path: Optional[Path] = None) -> None:
    try:
        cfg = load_config(config_path or resolve_config_path())
        generate(cfg)
    except GeneratorError as exc:
        print(f"ERROR {exc.stage}: {exc}", file=sys.stderr)
        raise SystemExit(1)
    except OSError as exc:
        print(f"ERROR io: {exc}", file=sys.stderr)
        raise SystemExit(1)
    print("\nDone.")

if __name__ == "__main__":
    main()

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigError

USER_AGENT = "tzdb-generator/0.1 (+https://example.invalid)"

DB_FILENAME = "timezonedb.csv.zip"
DB_URL = "https://timezonedb.com/files/" + DB_FILENAME
COUNTRY_ENTRY = "country.csv"
ZONE_ENTRY = "zone.csv"
OUTPUT_PATH = "tz_data.py"

CONFIG_ENV = "TZDB_GENERATOR_CONFIG"
DEFAULT_CONFIG_PATH = Path("tzdb_generator.yaml")

def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()

def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def write_text_atomic(path: Path, text: str) -> None:
    ensure_dir(path.parent)
    tmp = path.with_suffix(path.suffix + ".part")
    tmp.write_text(text, encoding="utf-8")
    tmp.replace(path)

def load_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return data

@dataclass(frozen=True)
class GeneratorConfig:
    url: str = DB_URL
    country_entry: str = COUNTRY_ENTRY
    zone_entry: str = ZONE_ENTRY
    output_path: Path = Path(OUTPUT_PATH)
    timeout: int = 120
    progress: bool = True
    formatter_command: Tuple[str, ...] = ("black", "--quiet")
    formatter_required: bool = False

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "GeneratorConfig":
        known = {"url", "country_entry", "zone_entry", "output_path", "timeout", "progress", "formatter"}
        unknown = sorted(set(cfg) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")

        kwargs: Dict[str, Any] = {}
        for key in ("url", "country_entry", "zone_entry"):
            if key in cfg:
                kwargs[key] = _expect(cfg, key, str)
        if "output_path" in cfg:
            kwargs["output_path"] = Path(_expect(cfg, "output_path", str))
        if "timeout" in cfg:
            timeout = _expect(cfg, "timeout", int)
            if timeout <= 0:
                raise ConfigError("timeout must be positive")
            kwargs["timeout"] = timeout
        if "progress" in cfg:
            kwargs["progress"] = _expect(cfg, "progress", bool)

        fmt = cfg.get("formatter") or {}
        if not isinstance(fmt, dict):
            raise ConfigError("formatter must be a mapping")
        if "command" in fmt:
            command = fmt["command"] or []
            if isinstance(command, str):
                command = command.split()
            if not isinstance(command, list) or not all(isinstance(c, str) for c in command):
                raise ConfigError("formatter.command must be a list of strings")
            kwargs["formatter_command"] = tuple(command)
        if "required" in fmt:
            kwargs["formatter_required"] = _expect(fmt, "required", bool, prefix="formatter.")
        return cls(**kwargs)

def _expect(cfg: Dict[str, Any], key: str, kind: type, prefix: str = "") -> Any:
    value = cfg[key]
    # bool is a subclass of int; a YAML `true` is never a valid timeout.
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(f"{prefix}{key} must be of type {kind.__name__}, got {value!r}")
    return value

def resolve_config_path(env: Optional[Dict[str, str]] = None) -> Optional[Path]:
    env = os.environ if env is None else env
    explicit = env.get(CONFIG_ENV)
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise ConfigError(f"{CONFIG_ENV} points to a missing file: {path}")
        return path
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None

def load_config(path: Optional[Path] = None) -> GeneratorConfig:
    if path is None:
        return GeneratorConfig()
    return GeneratorConfig.from_dict(load_yaml(path))

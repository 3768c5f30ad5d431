from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Sequence

from .errors import FormatError

def run_formatter(path: Path, command: Sequence[str], *, required: bool = False) -> bool:
    if not command:
        print("[skip] formatter")
        return False

    binary = shutil.which(command[0])
    if not binary:
        msg = f"`{command[0]}` is required to format {path} but not found on PATH"
        if required:
            raise FormatError(msg)
        print(f"[warn] {msg}; leaving output unformatted")
        return False

    parts = [binary, *command[1:], str(path)]
    print("[run]  " + " ".join(parts))
    try:
        subprocess.run(parts, check=True)
    except (subprocess.CalledProcessError, OSError) as exc:
        if required:
            raise FormatError(f"running {command[0]}: {exc}") from exc
        print(f"[warn] {command[0]} failed: {exc}")
        return False
    return True

"""Defaults from the repository `.env.defaults` file.

The file uses shell-compatible ``KEY=value`` lines so it can also be
sourced by CI scripts: ``export`` prefixes, quoted values and trailing
`` # comments`` are understood. Environment variables always win; these
values only fill gaps.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple

ENV_DEFAULTS_FILE = Path(__file__).resolve().parents[1] / ".env.defaults"


def _parse_line(raw: str) -> Optional[Tuple[str, str]]:
    line = raw.strip()
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if not line or line.startswith("#") or "=" not in line:
        return None

    key, value = (part.strip() for part in line.split("=", 1))
    if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
        return key, value[1:-1]
    # Unquoted values end at an inline comment
    return key, value.split(" #", 1)[0].rstrip()


def parse_env_defaults(text: str) -> Dict[str, str]:
    return dict(entry for entry in map(_parse_line, text.splitlines()) if entry)


@lru_cache(maxsize=1)
def load_env_defaults(path: Path = ENV_DEFAULTS_FILE) -> Dict[str, str]:
    if not path.exists():
        return {}
    return parse_env_defaults(path.read_text(encoding="utf-8"))


def get_env_default(key: str) -> str | None:
    return load_env_defaults().get(key)

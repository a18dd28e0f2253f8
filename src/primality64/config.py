from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except ImportError:
    import tomli as toml  # type: ignore

from primality64.utility import UserInputError

PROFILE_ENV = "PRIMALITY64_PROFILE"


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [PROFILE] section).
    .as_dict() feeds runtime.apply().

      - name:        profile name from [PROFILE] or the file stem
      - description: one-line description from [PROFILE] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except OSError as e:
        raise UserInputError(f"reading {path}: {e.strerror or e}.") from None
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [PROFILE] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("PROFILE") or {}
    if "PROFILE" in raw:
        raw = {k: v for k, v in raw.items() if k != "PROFILE"}

    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))
    return raw, name, description


def _section(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    sec = data.get(name, {})
    if not isinstance(sec, dict):
        raise UserInputError(f"{path.name}: [{name}] must be a table.")
    return sec


def _check_types(data: dict[str, Any], path: Path) -> None:
    cap = _section(data, "FACTOR", path).get("MAX_RHO_ATTEMPTS", 0)
    if isinstance(cap, bool) or not isinstance(cap, int) or cap < 0:
        raise UserInputError(f"{path.name}: FACTOR.MAX_RHO_ATTEMPTS must be an integer >= 0.")
    count = _section(data, "OUTPUT", path).get("MAX_PRIMES", 1)
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise UserInputError(f"{path.name}: OUTPUT.MAX_PRIMES must be a positive integer.")


# --- Public API ------------------------------------------------------------


def default_profile_path() -> Path:
    ref = pkg_files("primality64") / "profiles" / "default.toml"
    with as_file(ref) as real:
        return Path(real)


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load a TOML profile (default: $PRIMALITY64_PROFILE, else the packaged
    default.toml), strip [PROFILE] metadata and return Settings.
    """
    if path is None:
        env = os.environ.get(PROFILE_ENV)
        path = Path(env).expanduser() if env else default_profile_path()
    path = Path(path)
    if not path.is_file():
        raise UserInputError(f"Profile not found: {path}")

    raw = _load_toml(path)
    data, resolved_name, description = _split_profile_data(raw, path.stem)
    _check_types(data, path)
    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )

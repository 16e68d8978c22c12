"""
Engine configuration.

Settings are layered, lowest precedence first:
  1) built-in defaults
  2) environment variables (BF_TAPE_SIZE, BF_MIN_VALUE, BF_MAX_VALUE,
     BF_STEP_LIMIT, BF_TRACE); the CLI loads a .env file into the
     environment first
  3) a YAML file with the same field names, e.g.
        tape_size: 100
        min_value: 0
        max_value: 255
        step_limit: 5000
  4) explicit overrides (None means "not given")
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

import yaml

from bfcore.tape import DEFAULT_TAPE_SIZE, MAX_SAFE_INTEGER, MIN_SAFE_INTEGER, check_tape_settings

ENV_PREFIX = "BF_"
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class EngineConfig:
    tape_size: int = DEFAULT_TAPE_SIZE
    min_value: int = MIN_SAFE_INTEGER
    max_value: int = MAX_SAFE_INTEGER
    step_limit: Optional[int] = None  # None = run until the program stops on its own
    trace: bool = False

    def validate(self) -> 'EngineConfig':
        check_tape_settings(self.tape_size, self.min_value, self.max_value)
        if self.step_limit is not None and (not isinstance(self.step_limit, int) or self.step_limit < 1):
            raise ValueError(f"step_limit must be a positive integer or unset, got {self.step_limit!r}")
        return self

    def merged(self, **overrides: Any) -> 'EngineConfig':
        """Copy with every override that is not None applied."""
        given = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(given) - _field_names()
        if unknown:
            raise ValueError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
        return replace(self, **given)


def _field_names():
    return {f.name for f in fields(EngineConfig)}


def _parse_int(name: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _parse_bool(name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _coerce(values: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name, raw in values.items():
        if name == "trace":
            out[name] = _parse_bool(name, raw)
        elif name == "step_limit" and (raw is None or str(raw).strip().lower() in ("", "none")):
            out[name] = None
        else:
            out[name] = _parse_int(name, raw)
    return out


def config_from_env(environ: Optional[Mapping[str, str]] = None,
                    base: Optional[EngineConfig] = None) -> EngineConfig:
    """Apply BF_* environment variables on top of base (or the defaults)."""
    environ = os.environ if environ is None else environ
    base = base or EngineConfig()
    found = {}
    for name in _field_names():
        key = ENV_PREFIX + name.upper()
        if key in environ:
            found[name] = environ[key]
    values = _coerce(found)
    return replace(base, **values)


def load_config(path: str, base: Optional[EngineConfig] = None) -> EngineConfig:
    """Load settings from a YAML mapping on top of base (or the defaults)."""
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    unknown = set(data) - _field_names()
    if unknown:
        raise ValueError(f"Unknown config option(s) in {path}: {', '.join(sorted(unknown))}")

    return replace(base or EngineConfig(), **_coerce(data))


def resolve_config(path: Optional[str] = None,
                   environ: Optional[Mapping[str, str]] = None,
                   **overrides: Any) -> EngineConfig:
    """Defaults -> environment -> YAML file -> overrides, then validate."""
    config = config_from_env(environ)
    if path:
        config = load_config(path, base=config)
    return config.merged(**overrides).validate()

"""contextdb configuration loader.

Priority (high → low):
  1. CLI flags           (handled at call site — not in this module)
  2. Environment variables  (CONTEXTDB_HOME, CONTEXTDB_COMPRESSION_LEVEL)
  3. <base>/contextdb.yaml  (next to contextdb.db)
  4. Hardcoded defaults

All YAML reads use yaml.safe_load() — never yaml.load().
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from contextdb.search.engine import MAX_RESULTS
from contextdb.storage.codec import DEFAULT_LEVEL, MAX_LEVEL, MIN_LEVEL

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_HOME: Path = Path.home() / ".contextdb"
CONFIG_NAME: str = "contextdb.yaml"

_HOME_ENV = "CONTEXTDB_HOME"
_LEVEL_ENV = "CONTEXTDB_COMPRESSION_LEVEL"

# Top-level sections; anything else triggers a warning
_KNOWN_SECTIONS: frozenset[str] = frozenset(["storage", "search", "ingest"])

_DEFAULT_EXCLUDES: tuple[str, ...] = (".git", "__pycache__", "node_modules", ".venv", "*.pyc")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file or override contains an invalid value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class StorageCfg:
    """Blob archive settings (contextdb.yaml: storage:)."""

    compression_level: int = DEFAULT_LEVEL


@dataclass
class SearchCfg:
    """Search settings (contextdb.yaml: search:). Capped at MAX_RESULTS."""

    max_results: int = MAX_RESULTS


@dataclass
class IngestCfg:
    """Directory expansion settings used by ``contextdb ingest`` (contextdb.yaml: ingest:).

    Attributes:
        exclude: Glob patterns matched against file and directory names.
        max_depth: Maximum directory depth for recursive expansion.
    """

    exclude: list[str] = field(default_factory=lambda: list(_DEFAULT_EXCLUDES))
    max_depth: int = 10


@dataclass
class ContextDBConfig:
    """Root configuration object, built by load_config()."""

    base_dir: Path = field(default_factory=lambda: DEFAULT_HOME)
    storage: StorageCfg = field(default_factory=StorageCfg)
    search: SearchCfg = field(default_factory=SearchCfg)
    ingest: IngestCfg = field(default_factory=IngestCfg)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_SECTIONS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=4,
            )


def _as_int(value: Any, key: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from exc


def _validate(cfg: ContextDBConfig) -> None:
    level = cfg.storage.compression_level
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise ConfigError(
            f"storage.compression_level must be in [{MIN_LEVEL}, {MAX_LEVEL}], got {level}"
        )
    if not 1 <= cfg.search.max_results <= MAX_RESULTS:
        raise ConfigError(
            f"search.max_results must be in [1, {MAX_RESULTS}], got {cfg.search.max_results}"
        )
    if cfg.ingest.max_depth < 0:
        raise ConfigError(f"ingest.max_depth must be >= 0, got {cfg.ingest.max_depth}")


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------


def _cfg_from_dict(data: dict[str, Any], base_dir: Path) -> ContextDBConfig:
    """Build a *ContextDBConfig* from a raw YAML dict."""
    cfg = ContextDBConfig(base_dir=base_dir)

    if "storage" in data:
        s = data["storage"] or {}
        cfg.storage = StorageCfg(
            compression_level=_as_int(
                s.get("compression_level", cfg.storage.compression_level),
                "storage.compression_level",
            ),
        )

    if "search" in data:
        q = data["search"] or {}
        cfg.search = SearchCfg(
            max_results=_as_int(q.get("max_results", cfg.search.max_results), "search.max_results"),
        )

    if "ingest" in data:
        i = data["ingest"] or {}
        exclude = i.get("exclude", cfg.ingest.exclude)
        if not isinstance(exclude, list):
            raise ConfigError(f"ingest.exclude must be a list of globs, got {exclude!r}")
        cfg.ingest = IngestCfg(
            exclude=[str(pat) for pat in exclude],
            max_depth=_as_int(i.get("max_depth", cfg.ingest.max_depth), "ingest.max_depth"),
        )

    return cfg


def _apply_env_overrides(cfg: ContextDBConfig) -> ContextDBConfig:
    """Apply CONTEXTDB_* environment variable overrides."""
    if level := os.environ.get(_LEVEL_ENV):
        cfg.storage.compression_level = _as_int(level, _LEVEL_ENV)
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_home(base_dir: Path | str | None = None) -> Path:
    """Return the store's base directory: argument → $CONTEXTDB_HOME → ~/.contextdb."""
    if base_dir is not None:
        return Path(base_dir).expanduser()
    if env_home := os.environ.get(_HOME_ENV):
        return Path(env_home).expanduser()
    return DEFAULT_HOME


def load_config(base_dir: Path | str | None = None) -> ContextDBConfig:
    """Load and return a merged *ContextDBConfig*.

    Args:
        base_dir: Store directory (CLI ``--home``). Defaults to
            ``$CONTEXTDB_HOME`` or ``~/.contextdb``.

    Returns:
        Fully merged *ContextDBConfig* with env var overrides applied.

    Raises:
        ConfigError: If a value is malformed or out of range.
    """
    home = resolve_home(base_dir)

    raw: dict[str, Any] = {}
    cfg_path = home / CONFIG_NAME
    if cfg_path.exists():
        loaded = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"'{cfg_path}' must contain a YAML mapping.")
        _warn_unknown_keys(loaded, cfg_path)
        raw = loaded

    cfg = _cfg_from_dict(raw, home)
    cfg = _apply_env_overrides(cfg)
    _validate(cfg)
    return cfg


def ensure_config(base_dir: Path | str | None = None) -> Path:
    """Create ``<base>/contextdb.yaml`` with defaults if it does not exist.

    The file is written with mode 0o600.

    Returns:
        Path to the config file.
    """
    home = resolve_home(base_dir)
    home.mkdir(parents=True, exist_ok=True)
    target = home / CONFIG_NAME

    if not target.exists():
        excludes = "\n".join(f'    - "{pat}"' for pat in _DEFAULT_EXCLUDES)
        content = (
            "# contextdb configuration.\n"
            "# Environment overrides: CONTEXTDB_HOME, CONTEXTDB_COMPRESSION_LEVEL\n"
            "\n"
            "storage:\n"
            f"  compression_level: {DEFAULT_LEVEL}   # zstd level, {MIN_LEVEL}-{MAX_LEVEL}\n"
            "\n"
            "search:\n"
            f"  max_results: {MAX_RESULTS}        # hard cap: {MAX_RESULTS}\n"
            "\n"
            "ingest:\n"
            "  max_depth: 10\n"
            "  exclude:\n"
            f"{excludes}\n"
        )
        target.write_text(content, encoding="utf-8")
        target.chmod(0o600)

    return target

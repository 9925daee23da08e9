import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from symbuild.spec import ConfigError, WorkspaceError

log = logging.getLogger(__name__)

CONFIG_FILENAME = "symbuild.toml"
ROOT_ENV_VAR = "SYMBUILD_ROOT"
DEFAULT_ROOT_SUBDIR = "src"

ENTRY_MATCH_MODES = ("exact", "substring")


@dataclass
class ToolchainConfig:
    cxx: str = "c++"
    make: str = "make"
    cxxflags: List[str] = field(default_factory=list)
    ldflags: List[str] = field(default_factory=list)


@dataclass
class BuildConfig:
    toolchain: ToolchainConfig = field(default_factory=ToolchainConfig)
    entry_symbols: List[str] = field(default_factory=lambda: ["main", "_main"])
    entry_match: str = "exact"
    jobs: int = 1
    source_suffixes: List[str] = field(default_factory=lambda: [".cc"])
    header_suffixes: List[str] = field(default_factory=lambda: [".h", ".hpp"])


def _expect(table: Dict[str, Any], key: str, kind: type, where: str) -> Any:
    value = table[key]
    if kind is list:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"[{where}] {key} must be a list of strings")
        return list(value)
    # bool is an int subclass; reject it where a number is expected.
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(f"[{where}] {key} must be of type {kind.__name__}")
    return value


def _table(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{name}] must be a table")
    return table


def load_config_from_path(root_path: Path) -> BuildConfig:
    """
    Loads `symbuild.toml` from the project root. A missing file yields the
    defaults; unknown keys are ignored.
    """
    config = BuildConfig()
    config_path = root_path / CONFIG_FILENAME
    if not config_path.is_file():
        return config

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    toolchain = _table(data, "toolchain")
    for key, kind in (("cxx", str), ("make", str), ("cxxflags", list), ("ldflags", list)):
        if key in toolchain:
            setattr(config.toolchain, key, _expect(toolchain, key, kind, "toolchain"))

    symbols = _table(data, "symbols")
    if "entry_symbols" in symbols:
        config.entry_symbols = _expect(symbols, "entry_symbols", list, "symbols")
    if "entry_match" in symbols:
        mode = _expect(symbols, "entry_match", str, "symbols")
        if mode not in ENTRY_MATCH_MODES:
            raise ConfigError(
                f"[symbols] entry_match must be one of {', '.join(ENTRY_MATCH_MODES)}"
            )
        config.entry_match = mode

    build = _table(data, "build")
    if "jobs" in build:
        jobs = _expect(build, "jobs", int, "build")
        if jobs < 1:
            raise ConfigError("[build] jobs must be at least 1")
        config.jobs = jobs
    for key in ("source_suffixes", "header_suffixes"):
        if key in build:
            setattr(config, key, _expect(build, key, list, "build"))

    log.debug(f"Loaded configuration from {config_path}")
    return config


def resolve_root(explicit: Optional[Path] = None) -> Path:
    """
    Finds the project root.

    Search priority: explicit path -> $SYMBUILD_ROOT -> ~/src. An explicit
    path must exist; the implicit candidates are skipped when missing.
    """
    if explicit is not None:
        if not explicit.is_dir():
            raise WorkspaceError(f"Project root is not a directory: {explicit}")
        return explicit.resolve()

    candidates: List[Path] = []
    env_dir = os.getenv(ROOT_ENV_VAR)
    if env_dir:
        candidates.append(Path(env_dir))
    try:
        candidates.append(Path.home() / DEFAULT_ROOT_SUBDIR)
    except RuntimeError:
        # No home directory could be determined.
        pass

    for candidate in candidates:
        if candidate.is_dir():
            return candidate.resolve()

    tried = ", ".join(str(c) for c in candidates) or "<none>"
    raise WorkspaceError(f"Could not resolve a project root (tried: {tried})")

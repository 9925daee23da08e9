__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .bus import bus, symbuild_operator
from .config import (
    BuildConfig,
    ToolchainConfig,
    load_config_from_path,
    resolve_root,
)

# Note: library code emits message ids through `bus`; only the CLI decides
# how (and whether) they are drawn.

__all__ = [
    "bus",
    "symbuild_operator",
    "BuildConfig",
    "ToolchainConfig",
    "load_config_from_path",
    "resolve_root",
]

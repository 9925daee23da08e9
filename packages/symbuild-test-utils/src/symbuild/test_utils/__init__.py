from .bus import SpyBus
from .fakes import FakeToolchain, ManifestSymbolReader
from .workspace import WorkspaceFactory, manifest_content

__all__ = [
    "SpyBus",
    "FakeToolchain",
    "ManifestSymbolReader",
    "WorkspaceFactory",
    "manifest_content",
]

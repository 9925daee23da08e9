import pytest
from typing import TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from .workspace import WorkspaceFactory
    from .bus import SpyBus
    from .fakes import FakeToolchain


@pytest.fixture
def workspace_factory(tmp_path: Path) -> "WorkspaceFactory":
    """Provides a factory to create isolated test workspaces."""
    # Lazy import to prevent 'symbuild' from being imported during pytest
    # collection, which causes coverage warnings.
    from .workspace import WorkspaceFactory

    return WorkspaceFactory(tmp_path / "root")


@pytest.fixture
def spy_bus() -> "SpyBus":
    """Provides a SpyBus instance to intercept and inspect bus messages."""
    from .bus import SpyBus

    return SpyBus()


@pytest.fixture
def fake_toolchain() -> "FakeToolchain":
    from .fakes import FakeToolchain

    return FakeToolchain()

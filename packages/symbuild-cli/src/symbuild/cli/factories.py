from pathlib import Path
from typing import Optional

from symbuild.adapter.gnu import ElfSymbolReader, GnuToolchain
from symbuild.app import SymbuildApp
from symbuild.common import load_config_from_path


def make_app(root_path: Path, jobs: Optional[int] = None) -> SymbuildApp:
    config = load_config_from_path(root_path)
    return SymbuildApp(
        root_path=root_path,
        toolchain=GnuToolchain(config.toolchain),
        reader=ElfSymbolReader(),
        config=config,
        jobs=jobs,
    )

import logging
import os
from pathlib import Path
from typing import Dict, List, Sequence

from symbuild.spec import WorkspaceError

log = logging.getLogger(__name__)


def object_path_for(source_path: Path) -> Path:
    # foo/bar.cc -> foo/bar.o
    return source_path.with_suffix(".o")


def dep_path_for(source_path: Path) -> Path:
    # foo/bar.cc -> foo/bar.cc.d
    return source_path.with_name(source_path.name + ".d")


class Workspace:
    """
    A project root whose non-hidden immediate subdirectories are packages.

    Packages are flat: only files directly inside a package directory are
    considered, nested directories are not subpackages.
    """

    def __init__(
        self,
        root_path: Path,
        source_suffixes: Sequence[str] = (".cc",),
        header_suffixes: Sequence[str] = (".h", ".hpp"),
    ):
        self.root_path = root_path
        self.source_suffixes = tuple(source_suffixes)
        self.header_suffixes = tuple(header_suffixes)
        self.packages: List[str] = self._discover_packages()

    def _discover_packages(self) -> List[str]:
        try:
            with os.scandir(self.root_path) as entries:
                names = [
                    entry.name
                    for entry in entries
                    # Dot-prefixed directories (.git, .cache, ...) are never packages.
                    if entry.is_dir() and not entry.name.startswith(".")
                ]
        except OSError as e:
            raise WorkspaceError(f"Could not open directory: {self.root_path} ({e})") from e
        return sorted(names)

    def has_package(self, name: str) -> bool:
        return name in self.packages

    def package_dir(self, name: str) -> Path:
        return self.root_path / name

    def is_source(self, filename: str) -> bool:
        return filename.endswith(self.source_suffixes)

    def is_header(self, filename: str) -> bool:
        return filename.endswith(self.header_suffixes)

    def source_files(self, package: str) -> List[Path]:
        package_dir = self.package_dir(package)
        sources: List[Path] = []
        try:
            with os.scandir(package_dir) as entries:
                for entry in entries:
                    if not entry.is_file():
                        continue
                    if self.is_source(entry.name):
                        sources.append(package_dir / entry.name)
                    elif self.is_header(entry.name):
                        log.debug(f"Skipping header {package_dir / entry.name}")
        except OSError as e:
            raise WorkspaceError(f"Could not open directory: {package_dir} ({e})") from e

        sources.sort()
        # foo.cc and foo.cpp would both compile to foo.o.
        owners: Dict[Path, Path] = {}
        for source_path in sources:
            object_path = object_path_for(source_path)
            if object_path in owners:
                raise WorkspaceError(
                    f"Sources {owners[object_path]} and {source_path} "
                    f"both compile to {object_path}"
                )
            owners[object_path] = source_path
        return sources

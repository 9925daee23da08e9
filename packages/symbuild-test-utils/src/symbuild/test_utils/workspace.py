import json
from pathlib import Path
from typing import Iterable, List, Tuple


def manifest_content(
    exports: Iterable[str] = (),
    undefined: Iterable[str] = (),
    weak: Iterable[str] = (),
    common: Iterable[str] = (),
    locals: Iterable[str] = (),
) -> str:
    """
    Source text understood by FakeToolchain: a JSON description of the symbol
    table the "compiled" object will carry.
    """
    return json.dumps(
        {
            "exports": list(exports),
            "undefined": list(undefined),
            "weak": list(weak),
            "common": list(common),
            "locals": list(locals),
        }
    )


class WorkspaceFactory:
    """Builds an isolated multi-package source tree for tests."""

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files: List[Tuple[str, str]] = []
        self._dirs: List[str] = []

    def with_source(
        self,
        path: str,
        exports: Iterable[str] = (),
        undefined: Iterable[str] = (),
        weak: Iterable[str] = (),
        common: Iterable[str] = (),
        locals: Iterable[str] = (),
    ) -> "WorkspaceFactory":
        content = manifest_content(exports, undefined, weak, common, locals)
        self._files.append((path, content))
        return self

    def with_raw_file(self, path: str, content: str) -> "WorkspaceFactory":
        self._files.append((path, content))
        return self

    def with_package(self, name: str) -> "WorkspaceFactory":
        self._dirs.append(name)
        return self

    def with_config(self, toml_text: str) -> "WorkspaceFactory":
        self._files.append(("symbuild.toml", toml_text))
        return self

    def build(self) -> Path:
        self.root_path.mkdir(parents=True, exist_ok=True)
        for rel_dir in self._dirs:
            (self.root_path / rel_dir).mkdir(parents=True, exist_ok=True)
        for rel_path, content in self._files:
            file_path = self.root_path / rel_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
        return self.root_path

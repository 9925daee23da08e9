import json
from pathlib import Path
from typing import List, Optional, Sequence, Set, Tuple

from symbuild.spec import (
    ObjectFormatError,
    SectionKind,
    SymbolBinding,
    SymbolRecord,
    ToolchainError,
)


class FakeToolchain:
    """
    In-memory stand-in for the compiler and linker.

    `compile` turns a manifest source (see `manifest_content`) into a JSON
    object file readable by ManifestSymbolReader. Every call is recorded.
    """

    def __init__(self, fail_on: Optional[Set[Tuple[str, str]]] = None):
        # (operation, file name) pairs that should fail, e.g. ("compile", "bad.cc")
        self.fail_on = fail_on or set()
        self.calls: List[Tuple[str, str]] = []
        self.link_calls: List[Tuple[List[str], str]] = []

    def _check(self, operation: str, path: Path) -> None:
        self.calls.append((operation, str(path)))
        if (operation, path.name) in self.fail_on:
            raise ToolchainError([operation, str(path)], returncode=1)

    def generate_deps(
        self, source_path: Path, dep_path: Path, object_path: Path
    ) -> None:
        self._check("deps", source_path)
        dep_path.write_text(f"{object_path}: {source_path}\n", encoding="utf-8")

    def compile(self, source_path: Path, dep_path: Path, object_path: Path) -> None:
        self._check("compile", source_path)
        manifest = json.loads(source_path.read_text(encoding="utf-8"))
        records = []
        records += [(n, "global", "defined") for n in manifest.get("exports", [])]
        records += [(n, "weak", "defined") for n in manifest.get("weak", [])]
        records += [(n, "global", "common") for n in manifest.get("common", [])]
        records += [(n, "local", "defined") for n in manifest.get("locals", [])]
        records += [(n, "global", "undefined") for n in manifest.get("undefined", [])]
        object_path.write_text(
            json.dumps([{"name": n, "binding": b, "section": s} for n, b, s in records]),
            encoding="utf-8",
        )

    def link(self, inputs: Sequence[Path], output_path: Path) -> None:
        self._check("link", output_path)
        self.link_calls.append(([str(p) for p in inputs], str(output_path)))


class ManifestSymbolReader:
    """Reads the JSON object files written by FakeToolchain."""

    def read_symbols(self, object_path: Path) -> List[SymbolRecord]:
        try:
            raw = json.loads(Path(object_path).read_text(encoding="utf-8"))
        except OSError as e:
            raise ObjectFormatError(str(object_path), f"cannot open file ({e})") from e
        except json.JSONDecodeError as e:
            raise ObjectFormatError(str(object_path), "not an object manifest") from e
        return [
            SymbolRecord(
                name=entry["name"],
                binding=SymbolBinding(entry["binding"]),
                section=SectionKind(entry["section"]),
            )
            for entry in raw
        ]

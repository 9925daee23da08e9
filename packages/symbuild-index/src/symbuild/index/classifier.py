from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from symbuild.common import bus
from symbuild.spec import (
    ClassifiedObject,
    EntryPointMatcherProtocol,
    SymbolReaderProtocol,
    SymbolRecord,
)


class EntryPointMatcher(EntryPointMatcherProtocol):
    """
    Decides whether an object file is a link root from its exported names.

    In "exact" mode a name must equal one of the markers. In "substring" mode
    any exported name containing a marker qualifies, which also matches names
    that merely embed the marker (e.g. `domain_checker`).
    """

    def __init__(self, markers: Sequence[str], mode: str = "exact"):
        if mode not in ("exact", "substring"):
            raise ValueError(f"Unknown entry match mode: {mode}")
        self.markers = tuple(markers)
        self.mode = mode

    def matches(self, name: str) -> bool:
        if self.mode == "exact":
            return name in self.markers
        return any(marker in name for marker in self.markers)

    def is_entry_point(self, exported: Sequence[str]) -> bool:
        return any(self.matches(name) for name in exported)


def partition_symbols(records: Iterable[SymbolRecord]) -> Tuple[List[str], List[str]]:
    """
    Splits raw records into (exported, undefined) names.

    Unnamed records and local definitions are dropped. Undefined names keep
    duplicates and file order.
    """
    exported: List[str] = []
    undefined: List[str] = []
    for record in records:
        if not record.name:
            continue
        if record.is_undefined:
            undefined.append(record.name)
        elif record.is_exported:
            exported.append(record.name)
    return exported, undefined


class SymbolClassifier:
    def __init__(
        self, reader: SymbolReaderProtocol, matcher: EntryPointMatcherProtocol
    ):
        self.reader = reader
        self.matcher = matcher

    def classify(self, object_path: Path, package: str) -> ClassifiedObject:
        """
        Reads and classifies one object file.

        ObjectFormatError from the reader propagates: a malformed object is
        fatal. An empty symbol table is reported and yields an empty object.
        """
        path = str(object_path)
        records = [r for r in self.reader.read_symbols(object_path) if r.name]
        if not records:
            bus.warning("index.symtab.empty", path=path)
            return ClassifiedObject(path=path, package=package)

        bus.debug("index.symtab.read", count=len(records), path=path)
        exported, undefined = partition_symbols(records)
        return ClassifiedObject(
            path=path,
            package=package,
            exported=tuple(exported),
            undefined=tuple(undefined),
            is_entry_point=self.matcher.is_entry_point(exported),
        )

import threading
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from symbuild.common import bus
from symbuild.spec import (
    BuildIndexProtocol,
    ClassifiedObject,
    DuplicateObjectError,
    IndexFrozenError,
    SymbolCollision,
)


class BuildIndex(BuildIndexProtocol):
    """
    Process-wide symbol index for one build run.

    Four append-only tables:
      - package -> object files (membership)
      - package -> object files flagged as entry points
      - object file -> undefined symbol names
      - exported symbol name -> defining object file (first writer wins)

    The index is populated once per object file and frozen before any
    dependency resolution reads it.

    Collisions on `quiet_symbols` (normally the entry-point markers, which
    every program defines) are still recorded but only reported at debug level.
    """

    def __init__(self, quiet_symbols: Iterable[str] = ()) -> None:
        self.quiet_symbols = frozenset(quiet_symbols)
        self._package_files: Dict[str, List[str]] = defaultdict(list)
        self._package_entries: Dict[str, List[str]] = defaultdict(list)
        self._file_undefined: Dict[str, List[str]] = {}
        self._definers: Dict[str, str] = {}
        self._collisions: List[SymbolCollision] = []
        self._lock = threading.Lock()
        self._frozen = False

    # --- Population ---

    def record(self, obj: ClassifiedObject) -> List[SymbolCollision]:
        """
        Records one classified object file.

        Returns the exported names that were already defined elsewhere; those
        definitions are ignored and the earlier definer is kept.
        """
        collisions: List[SymbolCollision] = []
        with self._lock:
            if self._frozen:
                raise IndexFrozenError(f"Cannot record {obj.path}: index is frozen")
            if obj.path in self._file_undefined:
                raise DuplicateObjectError(f"Object file recorded twice: {obj.path}")

            self._file_undefined[obj.path] = list(obj.undefined)
            for symbol in obj.exported:
                kept = self._definers.setdefault(symbol, obj.path)
                if kept != obj.path:
                    collisions.append(
                        SymbolCollision(symbol=symbol, kept=kept, ignored=obj.path)
                    )

            self._package_files[obj.package].append(obj.path)
            if obj.is_entry_point:
                self._package_entries[obj.package].append(obj.path)
            self._collisions.extend(collisions)

        for collision in collisions:
            if collision.symbol in self.quiet_symbols:
                bus.debug(
                    "index.symbol.duplicate_entry",
                    symbol=collision.symbol,
                    kept=collision.kept,
                    ignored=collision.ignored,
                )
                continue
            bus.warning(
                "index.symbol.duplicate",
                symbol=collision.symbol,
                kept=collision.kept,
                ignored=collision.ignored,
            )
        return collisions

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # --- Queries ---

    def packages(self) -> List[str]:
        return list(self._package_files.keys())

    def files_of(self, package: str) -> List[str]:
        return list(self._package_files.get(package, []))

    def entry_points_of(self, package: str) -> List[str]:
        return list(self._package_entries.get(package, []))

    def undefined_of(self, object_path: str) -> List[str]:
        return list(self._file_undefined.get(object_path, []))

    def definer_of(self, symbol: str) -> Optional[str]:
        return self._definers.get(symbol)

    def definers(self) -> Dict[str, str]:
        return dict(self._definers)

    def object_files(self) -> List[str]:
        return list(self._file_undefined.keys())

    @property
    def collisions(self) -> List[SymbolCollision]:
        return list(self._collisions)

    def __contains__(self, object_path: object) -> bool:
        return object_path in self._file_undefined

    def __len__(self) -> int:
        return len(self._file_undefined)

    def dump(self) -> List[Tuple[str, List[Tuple[str, str]]]]:
        """
        Returns the four tables as (title, [(key, value), ...]) rows.
        """
        def _rows(table: Dict[str, List[str]]) -> List[Tuple[str, str]]:
            return [(key, value) for key, values in table.items() for value in values]

        return [
            ("package -> file manifest", _rows(self._package_files)),
            ("package -> main manifest", _rows(self._package_entries)),
            ("file -> undef sym manifest", _rows(self._file_undefined)),
            ("exported sym -> file manifest", list(self._definers.items())),
        ]

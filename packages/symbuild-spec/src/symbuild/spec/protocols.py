from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from .models import ClassifiedObject, SymbolCollision, SymbolRecord


class SymbolReaderProtocol(Protocol):
    """
    Defines the contract for extracting the symbol table of an object file.
    """

    def read_symbols(self, object_path: Path) -> List[SymbolRecord]:
        """
        Return every symbol-table record of the object file.

        An empty list means the file has no symbol table. Implementations must
        raise ObjectFormatError when the file cannot be opened or is not a
        relocatable object.
        """
        ...


class ToolchainProtocol(Protocol):
    """
    Defines the contract for the external compiler/linker.

    Every operation blocks until the underlying command finishes and raises
    ToolchainError on any unsuccessful outcome.
    """

    def generate_deps(
        self, source_path: Path, dep_path: Path, object_path: Path
    ) -> None:
        """Emit a make-style prerequisite description for the source file."""
        ...

    def compile(self, source_path: Path, dep_path: Path, object_path: Path) -> None:
        """Produce `object_path` from the source, driven by the deps description."""
        ...

    def link(self, inputs: Sequence[Path], output_path: Path) -> None:
        """Link the object files into the executable `output_path`."""
        ...


class EntryPointMatcherProtocol(Protocol):
    def is_entry_point(self, exported: Sequence[str]) -> bool: ...


class BuildIndexProtocol(Protocol):
    def record(self, obj: ClassifiedObject) -> List[SymbolCollision]: ...

    def packages(self) -> List[str]: ...

    def files_of(self, package: str) -> List[str]: ...

    def entry_points_of(self, package: str) -> List[str]: ...

    def undefined_of(self, object_path: str) -> List[str]: ...

    def definer_of(self, symbol: str) -> Optional[str]: ...

    def definers(self) -> Dict[str, str]: ...

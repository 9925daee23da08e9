from .models import (
    SymbolBinding,
    SectionKind,
    SymbolRecord,
    ClassifiedObject,
    SymbolCollision,
    LinkReason,
    Resolution,
    LinkResult,
)
from .protocols import (
    SymbolReaderProtocol,
    ToolchainProtocol,
    EntryPointMatcherProtocol,
    BuildIndexProtocol,
)
from .errors import (
    SymbuildError,
    UsageError,
    WorkspaceError,
    ConfigError,
    ObjectFormatError,
    ToolchainError,
    BuildIndexError,
    DuplicateObjectError,
    IndexFrozenError,
)

__all__ = [
    "SymbolBinding",
    "SectionKind",
    "SymbolRecord",
    "ClassifiedObject",
    "SymbolCollision",
    "LinkReason",
    "Resolution",
    "LinkResult",
    "SymbolReaderProtocol",
    "ToolchainProtocol",
    "EntryPointMatcherProtocol",
    "BuildIndexProtocol",
    "SymbuildError",
    "UsageError",
    "WorkspaceError",
    "ConfigError",
    "ObjectFormatError",
    "ToolchainError",
    "BuildIndexError",
    "DuplicateObjectError",
    "IndexFrozenError",
]

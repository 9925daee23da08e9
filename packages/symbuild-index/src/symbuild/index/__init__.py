from .build_index import BuildIndex
from .classifier import EntryPointMatcher, SymbolClassifier, partition_symbols

__all__ = ["BuildIndex", "EntryPointMatcher", "SymbolClassifier", "partition_symbols"]

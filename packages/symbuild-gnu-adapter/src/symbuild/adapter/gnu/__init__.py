from .elf_reader import ElfSymbolReader
from .toolchain import GnuToolchain

__all__ = ["ElfSymbolReader", "GnuToolchain"]

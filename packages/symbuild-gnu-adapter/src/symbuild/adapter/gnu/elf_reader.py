import logging
from pathlib import Path
from typing import List

from elftools.common.exceptions import ELFError
from elftools.construct.core import ConstructError
from elftools.elf.elffile import ELFFile
from elftools.elf.sections import SymbolTableSection

from symbuild.spec import (
    ObjectFormatError,
    SectionKind,
    SymbolBinding,
    SymbolReaderProtocol,
    SymbolRecord,
)

log = logging.getLogger(__name__)

# pyelftools reports GNU_UNIQUE (10) under the generic STB_LOOS name.
BINDING_MAP = {
    "STB_LOCAL": SymbolBinding.LOCAL,
    "STB_GLOBAL": SymbolBinding.GLOBAL,
    "STB_WEAK": SymbolBinding.WEAK,
    "STB_GNU_UNIQUE": SymbolBinding.UNIQUE,
    "STB_LOOS": SymbolBinding.UNIQUE,
}

SECTION_MAP = {
    "SHN_UNDEF": SectionKind.UNDEFINED,
    "SHN_COMMON": SectionKind.COMMON,
}


class ElfSymbolReader(SymbolReaderProtocol):
    """
    Reads the static symbol table (.symtab) of ELF relocatable objects.
    """

    def read_symbols(self, object_path: Path) -> List[SymbolRecord]:
        try:
            with open(object_path, "rb") as f:
                elf = ELFFile(f)
                return self._read_elf(elf, object_path)
        except OSError as e:
            raise ObjectFormatError(str(object_path), f"cannot open file ({e})") from e
        except (ELFError, ConstructError) as e:
            raise ObjectFormatError(str(object_path), f"not an ELF object ({e})") from e

    def _read_elf(self, elf: ELFFile, object_path: Path) -> List[SymbolRecord]:
        e_type = elf.header["e_type"]
        if e_type != "ET_REL":
            raise ObjectFormatError(
                str(object_path), f"expected a relocatable object, got {e_type}"
            )
        log.debug(
            f"{object_path}: ELF{elf.elfclass} {elf.get_machine_arch()} relocatable"
        )

        symtab = elf.get_section_by_name(".symtab")
        if symtab is None or not isinstance(symtab, SymbolTableSection):
            return []

        records: List[SymbolRecord] = []
        for symbol in symtab.iter_symbols():
            bind = symbol["st_info"]["bind"]
            shndx = symbol["st_shndx"]
            records.append(
                SymbolRecord(
                    name=symbol.name,
                    binding=BINDING_MAP.get(bind, SymbolBinding.OTHER),
                    section=SECTION_MAP.get(shndx, SectionKind.DEFINED),
                )
            )
        log.debug(f"read {len(records)} symbols from {object_path}")
        return records

from enum import IntEnum

MAGIC_HEADER = b"\x00\x00go19ld"
MAGIC_FOOTER = b"\xffgo19ld"
SUPPORTED_VERSION = 1

BUFFER_SIZE = 4096

SECTION_ENTRY = 0xFE
SECTION_END = 0xFF


class SymKind(IntEnum):
    """Symbol kinds, taken from go1.10 cmd/internal/objabi"""
    UNKNOWN = -1
    Sxxx = 0  # otherwise invalid zero value
    STEXT = 1  # executable instructions
    SRODATA = 2
    SNOPTRDATA = 3
    SDATA = 4
    SBSS = 5
    SNOPTRBSS = 6
    STLSBSS = 7
    SDWARFINFO = 8
    SDWARFRANGE = 9
    SDWARFLOC = 10

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN

    def __str__(self):
        if self == SymKind.Sxxx:
            return "INVALID"
        return self.name


class RelocType(IntEnum):
    """Relocation types, taken from go1.10 cmd/internal/objabi"""
    UNKNOWN = -1
    R_ADDR = 1
    R_ADDRPOWER = 2
    R_ADDRARM64 = 3
    R_ADDRMIPS = 4
    R_ADDROFF = 5
    R_WEAKADDROFF = 6
    R_SIZE = 7
    R_CALL = 8
    R_CALLARM = 9
    R_CALLARM64 = 10
    R_CALLIND = 11
    R_CALLPOWER = 12
    R_CALLMIPS = 13
    R_CONST = 14
    R_PCREL = 15
    R_TLS_LE = 16
    R_TLS_IE = 17
    R_GOTOFF = 18
    R_PLT0 = 19
    R_PLT1 = 20
    R_PLT2 = 21
    R_USEFIELD = 22
    R_USETYPE = 23
    R_METHODOFF = 24
    R_POWER_TOC = 25
    R_GOTPCREL = 26
    R_JMPMIPS = 27
    R_DWARFSECREF = 28
    R_DWARFFILEREF = 29
    # arm64
    R_ARM64_TLS_LE = 30
    R_ARM64_TLS_IE = 31
    R_ARM64_GOTPCREL = 32
    # ppc64
    R_POWER_TLS_LE = 33
    R_POWER_TLS_IE = 34
    R_POWER_TLS = 35
    R_ADDRPOWER_DS = 36
    R_ADDRPOWER_GOT = 37
    R_ADDRPOWER_PCREL = 38
    R_ADDRPOWER_TOCREL = 39
    R_ADDRPOWER_TOCREL_DS = 40
    # s390x
    R_PCRELDBL = 41
    # mips
    R_ADDRMIPSU = 42
    R_ADDRMIPSTLS = 43
    R_ADDRCUOFF = 44

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN

    def __str__(self):
        if self == RelocType.UNKNOWN:
            return "Unknown"
        return self.name

"""In-memory representation of a decoded object file"""
from collections import namedtuple

SymbolReference = namedtuple("SymbolReference", ["name", "version"])
SymbolReference.__doc__ = "A symbol's name and version. Index 0 of a reference table is always the empty reference"

NO_REFERENCE = SymbolReference("", 0)

# offset is relative to the start of the data segment
DataAddr = namedtuple("DataAddr", ["size", "offset"])

Relocation = namedtuple("Relocation", ["offset", "size", "type", "add", "id_index"])

# a local variable, including input args and output
Local = namedtuple("Local", ["sym_index", "offset", "type", "gotype_index"])

Symbol = namedtuple("Symbol", [
    "id_index", "kind", "size", "dupok", "local", "typelink", "gotype_index",
    "data_addr", "relocations", "extended"])

# Additional metadata of STEXT symbols. pcsp, pcfile, pcline, pcinline and
# every entry of pcdata are DataAddrs into the data segment.
ExtendedFields = namedtuple("ExtendedFields", [
    "args", "frame", "leaf", "cfunc", "type_method", "shared_func", "nosplit",
    "locals", "pcsp", "pcfile", "pcline", "pcinline", "pcdata",
    "funcdata_index", "funcdata_offset", "file_index"])


class DecodedFile:
    """Result of a successful parse. The symbol and reference lists are tuples and must not be changed"""

    def __init__(self, symbols, references, data):
        self._symbols = tuple(symbols)
        self._references = tuple(references)
        self._data = bytes(data)

    @property
    def symbols(self):
        return self._symbols

    @property
    def references(self):
        return self._references

    @property
    def data(self):
        return self._data

    def reference(self, index):
        """Looks up a reference. Indices are not validated while decoding, so out of range ones resolve to the empty reference"""
        if 0 <= index < len(self._references):
            return self._references[index]
        return NO_REFERENCE

    def find_symbol(self, id_index):
        """Returns the first symbol defined under the reference id_index, or None"""
        for symbol in self._symbols:
            if symbol.id_index == id_index:
                return symbol
        return None

    def symbol_data(self, addr):
        """Returns the bytes of the data segment that addr points to"""
        return self._data[addr.offset:addr.offset + addr.size]

    def __repr__(self):
        return (f"<DecodedFile: {len(self._symbols)} symbols, "
                f"{len(self._references)} references, {len(self._data)} bytes of data>")

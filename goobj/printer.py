"""Text tables for decoded object files.

Column widths are measured in UTF-8 bytes, so tables line up byte for byte
with the output of the go toolchain's own readers."""
import sys

from .enums import SymKind

SYMBOL_HEADERS = ["Offset", "Size", "Type", "DupOK", "Local", "MakeTypeLink", "Name", "Version", "GoType"]
FUNCDATA_HEADERS = ["Name", "FuncData"]
RELOCATION_HEADERS = ["Symbol", "Offset", "Size", "Type", "Target+Add"]


def _width(s):
    return len(s.encode())


def _bool(b):
    return "true" if b else "false"


class Table:
    def __init__(self, headers):
        self.headers = list(headers)
        self.rows = []

    def add_row(self, values):
        self.rows.append([str(v) for v in values])

    def calc_max_widths(self):
        widths = [_width(h) for h in self.headers]
        for row in self.rows:
            for i, val in enumerate(row):
                widths[i] = max(widths[i], _width(val))
        return widths

    def write_row_to(self, out, row, widths):
        out.write(" ")
        for val, width in zip(row, widths):
            out.write(val)
            out.write(" " * (width - _width(val) + 1))
        out.write("\n")

    def write_to(self, out):
        widths = self.calc_max_widths()
        self.write_row_to(out, self.headers, widths)
        for row in self.rows:
            self.write_row_to(out, row, widths)


def symbol_table(objfile):
    table = Table(SYMBOL_HEADERS)
    for symbol in objfile.symbols:
        ref = objfile.reference(symbol.id_index)
        gotype = objfile.reference(symbol.gotype_index)
        table.add_row([
            hex(symbol.data_addr.offset),
            hex(symbol.size),
            str(symbol.kind),
            _bool(symbol.dupok),
            _bool(symbol.local),
            _bool(symbol.typelink),
            ref.name,
            str(ref.version),
            gotype.name,
        ])
    return table


def funcdata_table(objfile):
    table = Table(FUNCDATA_HEADERS)
    for symbol in objfile.symbols:
        if symbol.kind != SymKind.STEXT or symbol.extended is None:
            continue
        entries = []
        for i, index in enumerate(symbol.extended.funcdata_index):
            target = objfile.find_symbol(index)
            offset, size = (target.data_addr.offset, target.data_addr.size) if target else (0, 0)
            entries.append(f"{i} - {objfile.reference(index).name} ({hex(offset)} - {size})")
        table.add_row([objfile.reference(symbol.id_index).name, ", ".join(entries)])
    return table


def relocation_table(objfile):
    table = Table(RELOCATION_HEADERS)
    for symbol in objfile.symbols:
        name = objfile.reference(symbol.id_index).name
        for reloc in symbol.relocations:
            table.add_row([
                name,
                hex(reloc.offset),
                hex(reloc.size),
                str(reloc.type),
                f"{objfile.reference(reloc.id_index).name}+{reloc.add}",
            ])
    return table


def print_symbols(objfile, out=None):
    if out is None:
        out = sys.stdout
    out.write("The list of defined symbols:\n")
    symbol_table(objfile).write_to(out)


def print_funcdata(objfile, out=None):
    if out is None:
        out = sys.stdout
    out.write("The optional fields of STEXT-typed symbols:\n")
    funcdata_table(objfile).write_to(out)


def print_relocations(objfile, out=None):
    if out is None:
        out = sys.stdout
    out.write("The list of relocations:\n")
    relocation_table(objfile).write_to(out)

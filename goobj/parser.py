"""Decoder for go object files (go19ld format)"""
import logging
from tqdm import tqdm

from . import enums
from .enums import SymKind, RelocType
from .errors import (MagicNotFound, UnsupportedVersion, InvalidFooter,
                     MalformedSection, TruncatedInput)
from .objfile import (DecodedFile, SymbolReference, NO_REFERENCE, DataAddr,
                      Relocation, Local, Symbol, ExtendedFields)
from .utils.cursor import Cursor
from .utils.reader import Reader

logger = logging.getLogger(__name__)


class Parser:
    """Single-use decode session over one stream.

    The sections have to be read in file order; parse() does that. The
    individual steps are public so that they can be driven one by one."""

    def __init__(self, stream, progress=False):
        self.cursor = Cursor(stream)
        self.progress = progress
        # every symbol and STEXT sub-table takes the next region of the data segment
        self.data_offset = 0
        self.references = [NO_REFERENCE]
        self.symbols = []
        self.data = b""
        self.used = False

    async def parse(self):
        if self.used:
            if self.cursor.error is not None:
                raise self.cursor.error
            raise RuntimeError("A Parser can only be used once")
        self.used = True

        await self.skip_header()
        await self.check_version()
        await self.skip_dependencies()
        await self.read_references()
        await self.read_data_segment()
        await self.read_symbols()
        await self.check_footer()
        return DecodedFile(self.symbols, self.references, self.data)

    async def skip_header(self):
        magic = enums.MAGIC_HEADER
        try:
            window = await self.cursor.read_block(len(magic))
            while window != magic:
                window = window[1:] + bytes((await self.cursor.read_byte(),))
        except TruncatedInput as e:
            raise self.cursor.fail(MagicNotFound(
                f"header magic not found in {self.cursor.bytes_consumed} bytes")) from e
        logger.debug("Header ends at byte %d", self.cursor.bytes_consumed)

    async def check_version(self):
        version = await self.cursor.read_byte()
        if version != enums.SUPPORTED_VERSION:
            raise self.cursor.fail(UnsupportedVersion(f"unexpected version: {version}"))

    async def skip_dependencies(self):
        while await self.cursor.read_byte() != 0:
            pass

    async def _next_entry(self, section):
        """Reads a section marker. Returns False at the end of the section"""
        b = await self.cursor.read_byte()
        if b == enums.SECTION_END:
            return False
        if b != enums.SECTION_ENTRY:
            raise self.cursor.fail(MalformedSection(
                f"{section}: sanity check failed: {b:#x} at byte {self.cursor.bytes_consumed - 1}"))
        return True

    async def read_references(self):
        while await self._next_entry("references"):
            await self.read_reference()
        logger.debug("Read %d symbol references", len(self.references) - 1)

    async def read_reference(self):
        name = await self.cursor.read_string()
        version = await self.cursor.read_varint()
        self.references.append(SymbolReference(name, version))

    async def read_data_segment(self):
        length = await self.cursor.read_varint()
        if length < 0:
            raise self.cursor.fail(MalformedSection(f"negative data length {length}"))
        for _ in range(5):  # reloc, pcdata, automatics, funcdata, files
            await self.cursor.read_varint()

        logger.debug("Data segment is %d bytes long", length)
        if self.progress:
            prog = tqdm(total=length, unit="B", unit_scale=True)
        data = bytearray()
        try:
            while len(data) < length:
                chunk = await self.cursor.read_block(min(length - len(data), self.cursor.buffer_size))
                data += chunk
                if self.progress:
                    prog.update(len(chunk))
        finally:
            if self.progress:
                prog.close()
        self.data = bytes(data)

    async def read_symbols(self):
        while await self._next_entry("symbols"):
            await self.read_symbol()
        logger.debug("Read %d symbols, %d bytes of data associated",
                     len(self.symbols), self.data_offset)

    def _data_addr(self, size):
        addr = DataAddr(size, self.data_offset)
        self.data_offset += size
        return addr

    async def read_symbol(self):
        c = self.cursor
        kind = SymKind(await c.read_byte())
        id_index = await c.read_varint()
        flags = await c.read_varint()
        size = await c.read_varint()
        gotype_index = await c.read_varint()
        data_addr = self._data_addr(await c.read_varint())

        relocations = []
        for _ in range(await c.read_varint()):
            relocations.append(Relocation(
                offset=await c.read_varint(),
                size=await c.read_varint(),
                type=RelocType(await c.read_varint()),
                add=await c.read_varint(),
                id_index=await c.read_varint()))

        extended = None
        if kind == SymKind.STEXT:
            extended = await self.read_extended_fields()

        symbol = Symbol(id_index=id_index, kind=kind, size=size,
                        dupok=bool(flags & 1), local=bool(flags & 2),
                        typelink=bool(flags & 4), gotype_index=gotype_index,
                        data_addr=data_addr, relocations=tuple(relocations),
                        extended=extended)
        logger.debug("Symbol %d: %s %s, data at %#x+%#x, %d relocations",
                     id_index, kind, size, data_addr.offset, data_addr.size,
                     len(relocations))
        self.symbols.append(symbol)
        return symbol

    async def read_extended_fields(self):
        c = self.cursor
        args = await c.read_varint()
        frame = await c.read_varint()
        flags = await c.read_varint()
        nosplit = await c.read_varint() != 0

        local_vars = []
        for _ in range(await c.read_varint()):
            local_vars.append(Local(
                sym_index=await c.read_varint(),
                offset=await c.read_varint(),
                type=await c.read_varint(),
                gotype_index=await c.read_varint()))

        # pcln tables, order matters
        pcsp = self._data_addr(await c.read_varint())
        pcfile = self._data_addr(await c.read_varint())
        pcline = self._data_addr(await c.read_varint())
        pcinline = self._data_addr(await c.read_varint())
        pcdata = []
        for _ in range(await c.read_varint()):
            pcdata.append(self._data_addr(await c.read_varint()))

        funcdata_count = await c.read_varint()
        funcdata_index = [await c.read_varint() for _ in range(funcdata_count)]
        funcdata_offset = [await c.read_varint() for _ in range(funcdata_count)]

        file_index = [await c.read_varint() for _ in range(await c.read_varint())]

        # inline tree nodes: parent, file, line, func. Not kept
        for _ in range(await c.read_varint()):
            for _ in range(4):
                await c.read_varint()

        return ExtendedFields(
            args=args, frame=frame, leaf=bool(flags & 1), cfunc=bool(flags & 2),
            type_method=bool(flags & 4), shared_func=bool(flags & 8),
            nosplit=nosplit, locals=tuple(local_vars), pcsp=pcsp, pcfile=pcfile,
            pcline=pcline, pcinline=pcinline, pcdata=tuple(pcdata),
            funcdata_index=tuple(funcdata_index),
            funcdata_offset=tuple(funcdata_offset), file_index=tuple(file_index))

    async def check_footer(self):
        footer = await self.cursor.read_block(len(enums.MAGIC_FOOTER))
        if footer != enums.MAGIC_FOOTER:
            raise self.cursor.fail(InvalidFooter(f"invalid footer: {footer!r}"))


async def parse(stream, progress=False):
    """Decodes an object file from stream (an async file-like object, see goobj.utils.reader)"""
    return await Parser(stream, progress).parse()


async def parse_file(fname, start=None, end=None, progress=False):
    """Decodes the object file fname. start and end restrict decoding to a window of the file"""
    async with Reader(fname, start, end) as f:
        return await parse(f, progress)

"""Buffered byte cursor over an async stream.

The cursor is sticky: once a read fails, the failure is kept and every later
call raises it again without touching the stream."""

from ..enums import BUFFER_SIZE
from ..errors import TruncatedInput, MalformedSection
from .varint import zigzag_decode, MASK64


class Cursor:
    def __init__(self, stream, buffer_size=BUFFER_SIZE):
        """stream is any object with an async read(size) method, e.g. a Reader or an ABytesIO"""
        self.stream = stream
        self.buffer_size = buffer_size
        self.buf = b""
        self.bufpos = 0
        self.consumed = 0
        self.error = None

    @property
    def bytes_consumed(self):
        return self.consumed

    def fail(self, exc):
        """Poisons the cursor with exc and returns it, so callers can `raise cursor.fail(...)`"""
        self.error = exc
        return exc

    def _check(self):
        if self.error is not None:
            raise self.error

    async def _fill(self, size):
        try:
            data = await self.stream.read(size)
        except OSError as e:
            raise self.fail(e)
        self.buf = data
        self.bufpos = 0
        return len(data) != 0

    def _truncated(self, wanted):
        return self.fail(TruncatedInput(
            f"unexpected end of input at byte {self.consumed} (wanted {wanted} more)"))

    async def read_byte(self):
        self._check()
        if self.bufpos >= len(self.buf):
            if not await self._fill(self.buffer_size):
                raise self._truncated(1)
        b = self.buf[self.bufpos]
        self.bufpos += 1
        self.consumed += 1
        return b

    async def read_block(self, size):
        """Reads exactly size bytes, looping over short reads of the stream"""
        self._check()
        chunks = []
        left = size
        while left > 0:
            if self.bufpos >= len(self.buf):
                if not await self._fill(max(left, self.buffer_size)):
                    raise self._truncated(left)
            chunk = self.buf[self.bufpos:self.bufpos + left]
            self.bufpos += len(chunk)
            self.consumed += len(chunk)
            left -= len(chunk)
            chunks.append(chunk)
        return b"".join(chunks)

    async def read_varint(self):
        value = 0
        shift = 0
        while True:
            b = await self.read_byte()
            # groups past bit 63 fall off, as in a uint64
            if shift < 64:
                value |= (b & 0x7F) << shift
            if not b & 0x80:
                break
            shift += 7
        return zigzag_decode(value & MASK64)

    async def read_string(self):
        length = await self.read_varint()
        if length < 0:
            raise self.fail(MalformedSection(f"negative string length {length}"))
        return (await self.read_block(length)).decode("utf-8", "replace")

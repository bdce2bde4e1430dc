"""
Async byte sources the decoder can read from: a window over a file on disk, or an in-memory buffer.
"""

import aiofiles
import io


class Reader:
    """Forward-only window over a file. All methods are asynchronous"""

    def __init__(self, fname, start=None, end=None, opened=False):
        """Initializes the reader

        Args:
        =========
        fname: str, Reader or any other object with an async read/seek/tell API
        start: int, optional. If start is None, the window starts at the current position of the file handle when entering
        end: int, optional. If end is None, the window ends at the end of file
        opened: bool, optional. If opened equals True, the file handle won't be opened or closed when entering or exiting
        """
        self.fname = fname
        if isinstance(fname, str):
            self.fh = aiofiles.open(fname, mode="rb")
        else:
            self.fh = fname

        self.f = fname if opened else None
        self.opened = opened

        self.start = start
        self.end = end
        self.entered = False
        self.pos = 0

    async def __aenter__(self):
        if self.entered:
            raise RuntimeError("Reader has already been entered")

        if self.f is None:
            self.f = await self.fh.__aenter__()

        if self.start is None:
            self.start = await self.f.tell()
        if self.end is None:
            await self.f.seek(0, 2)
            self.end = await self.f.tell()
        if self.end < self.start:
            if not self.opened:
                await self.fh.__aexit__(None, None, None)
            raise ValueError("Window ends before it starts!")

        await self.f.seek(self.start)
        self.entered = True
        return self

    async def __aexit__(self, *e):
        if not self.opened:
            await self.fh.__aexit__(*e)

    def size(self):
        """Returns the size of the window"""
        return self.end - self.start

    async def read(self, size=None):
        """Reads at most size bytes, never past the end of the window.
        Like on file objects, fewer bytes may be returned than asked for"""
        left = self.size() - self.pos
        if size is None or size < 0 or size > left:
            size = left
        if size == 0:
            return b""
        data = await self.f.read(size)
        self.pos += len(data)
        return data

    async def tell(self):
        """Gets the current position relative to the window"""
        return self.pos


class ABytesIO(io.BytesIO):
    """BytesIO with the async API of Reader"""

    async def __aenter__(self):
        return super().__enter__()

    async def __aexit__(self, *e):
        super().__exit__(*e)

    async def seek(self, i, pos=0):
        return super().seek(i, pos)

    async def tell(self):
        return super().tell()

    async def read(self, length=None):
        return super().read(length)

"""
Stream doubles shared by the test suite
"""


class MockStreamWriter:
    def __init__(self, fail_with=None):
        self.buffer = []
        self.closed = False
        self.fail_with = fail_with

    def write(self, data):
        if self.fail_with:
            raise self.fail_with
        self.buffer.append(data)

    async def drain(self):
        pass

    def close(self):
        self.closed = True

    async def wait_closed(self):
        pass

    def get_extra_info(self, name, default=None):
        return ('127.0.0.1', 8000) if name == 'peername' else default

    @property
    def data(self):
        return b''.join(self.buffer)


class MockStreamReader:
    """Serves a byte string in reads of at most ``n`` bytes."""

    def __init__(self, data=b''):
        self.data = data
        self.pos = 0

    async def read(self, n=-1):
        if self.pos >= len(self.data):
            return b''
        if n == -1:
            chunk = self.data[self.pos:]
            self.pos = len(self.data)
        else:
            chunk = self.data[self.pos:self.pos + n]
            self.pos += n
        return chunk


class ChunkedStreamReader:
    """Serves a fixed list of chunks, one per read, and counts reads."""

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.reads = 0

    async def read(self, n=-1):
        self.reads += 1
        if not self.chunks:
            return b''
        chunk = self.chunks.pop(0)
        assert n == -1 or len(chunk) <= n
        return chunk

import asyncio

from websockets.exceptions import ConnectionClosedOK
from websockets.frames import Close


class FakeConnection:
    """Stands in for a Starlette websocket on the server side."""

    def __init__(self, name, fail=False):
        self.name = name
        self.fail = fail
        self.sent = []

    async def send_text(self, data):
        if self.fail:
            raise RuntimeError(f"{self.name} is gone")
        self.sent.append(data)

    def __repr__(self):
        return f"FakeConnection({self.name!r})"


class FakeClientSocket:
    """Stands in for a ``websockets`` client connection."""

    def __init__(self):
        self.sent = []
        self.closed = False
        self._inbox = asyncio.Queue()

    def feed(self, message):
        self._inbox.put_nowait(message)

    def hang_up(self):
        self._inbox.put_nowait(None)

    async def send(self, message):
        if self.closed:
            raise ConnectionClosedOK(Close(1000, ""), Close(1000, ""), True)
        self.sent.append(message)

    async def close(self):
        self.closed = True
        self.hang_up()

    def __aiter__(self):
        return self

    async def __anext__(self):
        message = await self._inbox.get()
        if message is None:
            raise StopAsyncIteration
        return message

"""
Fake aiohttp session/response doubles for token endpoint tests.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Reply:
    """Scripted answer for one request."""

    status: int = 200
    body: str = ""
    delay: float = 0.0
    raise_exception: BaseException | None = None


class FakeResp:
    def __init__(self, reply: Reply):
        self.status = reply.status
        self._reply = reply

    async def __aenter__(self):
        if self._reply.delay:
            await asyncio.sleep(self._reply.delay)
        if self._reply.raise_exception:
            raise self._reply.raise_exception
        return self

    async def __aexit__(self, _exc_type, _exc, _tb):
        return False

    async def text(self, encoding: str | None = None, errors: str = "strict") -> str:
        # Simulate asynchronous boundary
        await asyncio.sleep(0)
        return self._reply.body


@dataclass
class Call:
    url: Any
    auth: Any
    timeout: Any


@dataclass
class FakeSession:
    """Session answering GETs from a script; the last reply repeats."""

    replies: list[Reply] = field(default_factory=lambda: [Reply(200, "token")])
    calls: list[Call] = field(default_factory=list)
    closed: bool = False

    @property
    def get_calls(self) -> int:
        return len(self.calls)

    def get(self, url, auth=None, timeout=None):
        self.calls.append(Call(url, auth, timeout))
        index = min(len(self.calls) - 1, len(self.replies) - 1)
        return FakeResp(self.replies[index])

    async def close(self) -> None:
        self.closed = True


def session_with(*replies: Reply) -> FakeSession:
    return FakeSession(replies=list(replies))

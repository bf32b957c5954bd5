"""Test fixtures including a recording transport and an in-process remote engine."""

from __future__ import annotations

import pytest

from callwire.call import CallFactory
from callwire.codec import default_codec
from callwire.inbound import InboundService
from callwire.protocol.buffer import ByteBuffer
from callwire.transport import LoopbackTransport


class RecordingTransport:
    """A transport that records every request and returns a canned response.

    The response is encoded with the codec and type tag given to
    :meth:`respond_with`; raw bytes can be set directly on ``response``.
    """

    def __init__(self, codec) -> None:
        self.codec = codec
        self.requests: list[tuple[str, str, bytes]] = []
        self.response: bytes = b''
        self.error: BaseException | None = None

    def respond_with(self, value, type_tag) -> None:
        sink = ByteBuffer()
        self.codec.encode(value, sink, type_tag)
        self.response = sink.read_all()

    def invoke_remote(self, instance: str, function: str, payload: bytes) -> bytes:
        self.requests.append((instance, function, payload))
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last_payload(self) -> bytes:
        return self.requests[-1][2]




@pytest.fixture
def codec():
    return default_codec()


@pytest.fixture
def recorder(codec):
    """Fixture providing a RecordingTransport."""
    return RecordingTransport(codec)


@pytest.fixture
def factory(codec, recorder):
    """Fixture providing a CallFactory bound to the recording transport."""
    return CallFactory("engine", codec, recorder)


@pytest.fixture
def loopback(codec):
    """Fixture providing a LoopbackTransport serving a small 'math' instance."""
    service = InboundService(codec)

    @service.register("greet", [str], str)
    def greet(name):
        return name.upper()

    @service.register("sum", [int, int], int)
    def add(a, b):
        return a + b

    @service.register("noop", [], 'unit')
    def noop():
        return None

    @service.register("fail", [], 'unit')
    def fail():
        raise RuntimeError("boom")

    transport = LoopbackTransport()
    transport.bind("math", service)
    return transport

"""Unit tests for the remote side: InboundCall and InboundService."""

import struct

import pytest

from callwire.exc import ProtocolViolation, FramingError, FunctionNotFoundError
from callwire.inbound import InboundCall, InboundService
from callwire.protocol.framing import build_request


class TestInboundCall:
    def test_reads_in_declared_order(self, codec):
        payload = build_request([b'left', struct.pack('>q', 9)])
        call = InboundCall(payload, codec)
        assert call.parameter_count == 2
        assert call.parameter(str) == 'left'
        assert call.parameter(int) == 9
        call.finish()

    def test_reading_past_supplied(self, codec):
        call = InboundCall(build_request([]), codec)
        with pytest.raises(ProtocolViolation):
            call.parameter(str)

    def test_finish_with_unread(self, codec):
        call = InboundCall(build_request([b'a']), codec)
        with pytest.raises(ProtocolViolation, match="unread"):
            call.finish()

    def test_result_has_no_framing(self, codec):
        call = InboundCall(build_request([]), codec)
        assert call.result(str, "HELLO") == b'HELLO'

    def test_malformed_payload(self, codec):
        with pytest.raises(FramingError):
            InboundCall(b'\x00\x00\x00\x01', codec)


class TestInboundService:
    def setup_method(self):
        from callwire.codec import default_codec
        self.service = InboundService(default_codec())

    def test_register_returns_handler(self):
        @self.service.register("greet", [str], str)
        def greet(name):
            return name.upper()

        assert greet("x") == "X"
        assert "greet" in self.service
        assert self.service.functions == ["greet"]

    def test_dispatch(self):
        self.service.add("sum", lambda a, b: a + b, [int, int], int)
        payload = build_request([struct.pack('>q', 3), struct.pack('>q', 4)])
        assert self.service.dispatch("sum", payload) == struct.pack('>q', 7)

    def test_dispatch_unknown(self):
        with pytest.raises(FunctionNotFoundError, match="nope"):
            self.service.dispatch("nope", build_request([]))

    def test_dispatch_wrong_count(self):
        self.service.add("one", lambda a: a, [str], str)
        with pytest.raises(ProtocolViolation, match="takes 1 parameters, 2 supplied"):
            self.service.dispatch("one", build_request([b'a', b'b']))

"""Remote side of the call envelope: decode parameters, encode the result.

Usage::

    service = InboundService(default_codec())

    @service.register("greet", [str], str)
    def greet(name):
        return name.upper()

    response = service.dispatch("greet", payload)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Sequence, TYPE_CHECKING

from .exc import FunctionNotFoundError, ProtocolViolation
from .protocol.buffer import ByteBuffer
from .protocol.framing import parse_request

if TYPE_CHECKING:
    from .codec.base import Codec


class InboundCall:
    """A received request, read back one parameter at a time in declared order."""

    def __init__(self, payload: bytes | bytearray, codec: Codec) -> None:
        self._blocks = parse_request(payload)
        self._codec = codec
        self._next = 0

    @property
    def parameter_count(self) -> int:
        return len(self._blocks)

    def parameter(self, type_tag: Hashable) -> Any:
        """Decode the next parameter as *type_tag*."""
        if self._next >= len(self._blocks):
            raise ProtocolViolation(
                f"Parameter {self._next} requested but only "
                f"{len(self._blocks)} supplied"
            )
        block = self._blocks[self._next]
        self._next += 1
        return self._codec.decode(ByteBuffer(block), type_tag)

    def finish(self) -> None:
        """Check that every supplied parameter was read."""
        if self._next != len(self._blocks):
            raise ProtocolViolation(
                f"{len(self._blocks) - self._next} parameters left unread"
            )

    def result(self, type_tag: Hashable, value: Any) -> bytes:
        """Encode the response value. Responses carry no framing."""
        sink = ByteBuffer()
        self._codec.encode(value, sink, type_tag)
        return sink.read_all()


@dataclass(frozen=True)
class Endpoint:
    """A handler with its declared parameter and result types."""
    handler: Callable[..., Any]
    parameter_types: tuple[Hashable, ...]
    result_type: Hashable


class InboundService:
    """Named handlers served to remote callers."""

    def __init__(self, codec: Codec) -> None:
        self.codec = codec
        self._endpoints: dict[str, Endpoint] = {}

    def __contains__(self, function: str) -> bool:
        return function in self._endpoints

    @property
    def functions(self) -> list[str]:
        return list(self._endpoints)

    def add(
        self,
        function: str,
        handler: Callable[..., Any],
        parameter_types: Sequence[Hashable],
        result_type: Hashable,
    ) -> None:
        self._endpoints[function] = Endpoint(
            handler, tuple(parameter_types), result_type,
        )

    def register(
        self,
        function: str,
        parameter_types: Sequence[Hashable],
        result_type: Hashable,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of :meth:`add`. The handler is returned unchanged."""
        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.add(function, fn, parameter_types, result_type)
            return fn
        return decorator

    def dispatch(self, function: str, payload: bytes | bytearray) -> bytes:
        """Decode *payload*, run the handler and return the encoded result."""
        try:
            endpoint = self._endpoints[function]
        except KeyError:
            available = ", ".join(sorted(self._endpoints)) or "(none)"
            raise FunctionNotFoundError(
                f"Unknown function {function!r}. Available: {available}"
            )
        call = InboundCall(payload, self.codec)
        if call.parameter_count != len(endpoint.parameter_types):
            raise ProtocolViolation(
                f"{function} takes {len(endpoint.parameter_types)} parameters, "
                f"{call.parameter_count} supplied"
            )
        args = [call.parameter(t) for t in endpoint.parameter_types]
        call.finish()
        return call.result(endpoint.result_type, endpoint.handler(*args))

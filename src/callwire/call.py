"""Outbound calls: one function name plus ordered parameters, sent exactly once.

Usage::

    factory = CallFactory("greeter", default_codec(), transport)

    call = factory.create("greet", 1)
    call.parameter(str, "hello")
    reply = call.invoke(str)

The request payload is ``count:int32`` followed by one
``length:int32 payload`` block per parameter, in the order they were
supplied. The response is a single codec value with no framing.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Any, Hashable, TYPE_CHECKING

from .exc import ProtocolViolation
from .protocol.buffer import ByteBuffer
from .protocol.constants import MAX_INT32

if TYPE_CHECKING:
    from .codec.base import Codec
    from .transport import Transport

log = logging.getLogger("callwire.call")


class CallState(enum.Enum):
    """Lifecycle of an :class:`OutboundCall`. Transitions only move forward."""
    CREATED = 'created'
    ACCUMULATING = 'accumulating'
    READY = 'ready'
    INVOKED = 'invoked'


class OutboundCall:
    """A single call to a function on a remote instance.

    Created by :meth:`CallFactory.create` with the parameter count fixed
    and already written to the request buffer. Supply exactly that many
    parameters with :meth:`parameter`, then call :meth:`invoke` once.
    Not safe for concurrent use; create one call per remote invocation.
    """

    def __init__(
        self,
        instance: str,
        codec: Codec,
        transport: Transport,
        function: str,
        parameter_count: int,
    ) -> None:
        self._instance = instance
        self._codec = codec
        self._transport = transport
        self._function = function
        self._parameter_count = parameter_count
        self._supplied = 0
        self._invoked = False
        self._buffer: ByteBuffer | None = ByteBuffer()
        self._buffer.write_int(parameter_count)
        self._scratch: ByteBuffer | None = ByteBuffer()

    # ── Read-only state ────────────────────────────────────────────

    @property
    def instance(self) -> str:
        return self._instance

    @property
    def function(self) -> str:
        return self._function

    @property
    def parameter_count(self) -> int:
        return self._parameter_count

    @property
    def supplied(self) -> int:
        return self._supplied

    @property
    def state(self) -> CallState:
        if self._invoked:
            return CallState.INVOKED
        if self._supplied == self._parameter_count:
            return CallState.READY
        if self._supplied == 0:
            return CallState.CREATED
        return CallState.ACCUMULATING

    # ── Building ───────────────────────────────────────────────────

    def parameter(self, type_tag: Hashable, value: Any) -> None:
        """Encode *value* as the next parameter.

        Raises
        ------
        ProtocolViolation
            If the call was already invoked or all declared parameters
            have been supplied. The request buffer is not touched.
        """
        if self._invoked:
            raise ProtocolViolation(
                f"{self._function}: call already invoked"
            )
        if self._supplied >= self._parameter_count:
            raise ProtocolViolation(
                f"{self._function}: too many parameters supplied "
                f"(declared {self._parameter_count})"
            )
        scratch = self._scratch
        try:
            self._codec.encode(value, scratch, type_tag)
            encoded = scratch.read_all()
        finally:
            scratch.clear()
        self._buffer.write_int(len(encoded))
        self._buffer.write(encoded)
        self._supplied += 1

    # ── Invocation ─────────────────────────────────────────────────

    def invoke(self, type_tag: Hashable) -> Any:
        """Send the call and decode the response as *type_tag*.

        Transport and codec errors propagate unchanged. The call is
        consumed even if the transport fails.
        """
        if self._invoked:
            raise ProtocolViolation(f"{self._function}: call already invoked")
        if self._supplied != self._parameter_count:
            raise ProtocolViolation(
                f"{self._function}: parameters missing "
                f"(supplied {self._supplied} of {self._parameter_count})"
            )
        self._invoked = True
        payload = self._buffer.read_all()
        self._buffer = None
        self._scratch = None

        log.debug(
            "invoke: %s.%s (%d params, %d bytes)",
            self._instance, self._function, self._parameter_count, len(payload),
        )
        t0 = time.perf_counter()
        response = self._transport.invoke_remote(
            self._instance, self._function, payload,
        )
        elapsed = time.perf_counter() - t0
        log.debug(
            "invoke completed in %.3fms (%d bytes)", elapsed * 1000, len(response),
        )

        source = ByteBuffer(response)
        return self._codec.decode(source, type_tag)

    def __repr__(self) -> str:
        return (
            f"OutboundCall({self._instance!r}, {self._function!r}, "
            f"{self._supplied}/{self._parameter_count}, {self.state.value})"
        )


class CallFactory:
    """Creates :class:`OutboundCall` objects bound to one remote instance."""

    def __init__(self, instance: str, codec: Codec, transport: Transport) -> None:
        self.instance = instance
        self.codec = codec
        self.transport = transport

    def create(self, function: str, parameter_count: int) -> OutboundCall:
        """Start a new call to *function* taking *parameter_count* parameters."""
        if (
            isinstance(parameter_count, bool)
            or not isinstance(parameter_count, int)
            or not 0 <= parameter_count <= MAX_INT32
        ):
            raise ValueError(
                f"parameter_count must be an int in [0, {MAX_INT32}], "
                f"got {parameter_count!r}"
            )
        return OutboundCall(
            self.instance, self.codec, self.transport, function, parameter_count,
        )

    def __repr__(self) -> str:
        return f"CallFactory({self.instance!r})"

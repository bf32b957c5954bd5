"""Exception hierarchy for callwire."""


class CallwireError(Exception):
    """Base exception for all callwire errors."""


class ProtocolViolation(CallwireError):
    """A call was driven out of order (too many/too few parameters, double invoke)."""


class TransportError(CallwireError):
    """The remote invocation step failed."""


class RemoteCallError(TransportError):
    """Error raised by the remote engine while handling a call."""

    def __init__(self, instance: str, function: str, message: str) -> None:
        self.instance = instance
        self.function = function
        self.remote_message = message
        super().__init__(f"{instance}.{function}: {message}")


class CodecError(CallwireError):
    """Base exception for value encoding/decoding failures."""


class EncodeError(CodecError):
    """Failed to encode a Python value to bytes."""


class DecodeError(CodecError):
    """Failed to decode bytes to a Python value."""


class BufferUnderflowError(DecodeError):
    """Attempted to read more bytes than the buffer holds."""


class FramingError(DecodeError):
    """Malformed call envelope (bad count or length prefix)."""


class UnknownTypeError(CodecError):
    """No adapter registered for a type tag."""


class FactoryNotFoundError(CallwireError):
    """Named factory not found in a registry."""


class FunctionNotFoundError(CallwireError):
    """Function not registered on an inbound service."""
